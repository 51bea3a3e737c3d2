"""Validation Collector — fluent, field-keyed accumulation of validator output.

Invariants:
    - Adding an empty error list is a no-op
    - Every non-empty add folds into the running result with ValidationResult.combine,
      so field order and per-field error order follow call order
    - The collector never raises for business-rule errors
"""

from typing import Any

from pangolin.core.validation_error import ValidationError
from pangolin.core.validation_result import ValidationResult
from pangolin.core.validator import Validator


class ValidationCollector:
    """Accumulates errors per field and exposes the aggregate result."""

    def __init__(self):
        self._result = ValidationResult.valid()

    def add(self, field: str, errors: list[ValidationError]) -> "ValidationCollector":
        if errors is None:
            raise TypeError("Errors cannot be None")
        errors = list(errors)
        # field is checked even for an empty list so a typo never hides
        partial = ValidationResult.from_errors(field, errors)
        self._result = self._result.combine(partial)
        return self

    def check(self, field: str, value: Any, validator: Validator[Any]) -> "ValidationCollector":
        return self.add(field, validator.validate(value))

    def merge(self, result: ValidationResult) -> "ValidationCollector":
        self._result = self._result.combine(result)
        return self

    @property
    def result(self) -> ValidationResult:
        return self._result
