"""Validation Result — immutable, field-keyed aggregate of validation errors.

Invariants:
    - is_valid is True iff there are no errors (else InvalidResultState)
    - Field keys are non-blank strings without whitespace (else InvalidFieldName)
    - Every field maps to a NON-EMPTY tuple of ValidationError; empty lists are dropped
    - Field order is insertion order; per-field error order is insertion order
    - Instances never change; combine / filter_by_error_code return new instances
      that own a fresh mapping

Design Decisions:
    - combine is a left-to-right merge: same-field errors concatenate (self, other),
      so folding N results is associative but not commutative per field
    - formatted_messages keeps insertion order, like every other flattening query
"""

from functools import reduce
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping

from pangolin.core.errors import InvalidFieldName, InvalidResultState, ValidationFailed
from pangolin.core.validation_error import ValidationError


ErrorMap = Mapping[str, Iterable[ValidationError]]


def _check_field_name(field: object) -> str:
    if not isinstance(field, str) or not field.strip():
        raise InvalidFieldName(field)
    if any(ch.isspace() for ch in field):
        raise InvalidFieldName(field)
    return field


def _freeze(errors: ErrorMap | None) -> dict[str, tuple[ValidationError, ...]]:
    """Copy into a fresh dict of tuples, dropping fields with no errors."""
    frozen: dict[str, tuple[ValidationError, ...]] = {}
    for field, field_errors in (errors or {}).items():
        _check_field_name(field)
        if field_errors is None:
            raise TypeError(f"Errors for field '{field}' cannot be None")
        items = tuple(field_errors)
        for error in items:
            if not isinstance(error, ValidationError):
                raise TypeError(
                    f"Expected ValidationError for field '{field}', got {type(error).__name__}",
                )
        if items:
            frozen[field] = items
    return frozen


def _merge_errors(
    first: Mapping[str, tuple[ValidationError, ...]],
    second: Mapping[str, tuple[ValidationError, ...]],
) -> dict[str, tuple[ValidationError, ...]]:
    merged: dict[str, tuple[ValidationError, ...]] = {}
    for mapping in (first, second):
        for field, field_errors in mapping.items():
            merged[field] = merged.get(field, ()) + field_errors
    return merged


def _code_value(code: Any) -> str:
    return getattr(code, "value", code)


class ValidationResult:
    """Validity flag plus an ordered field -> errors mapping."""

    __slots__ = ("_valid", "_errors")

    _VALID: "ValidationResult"

    def __init__(self, valid: bool, errors: ErrorMap | None = None):
        frozen = _freeze(errors)
        if valid and frozen:
            raise InvalidResultState("Valid result cannot contain errors")
        if not valid and not frozen:
            raise InvalidResultState("Invalid result must contain errors")
        object.__setattr__(self, "_valid", bool(valid))
        object.__setattr__(self, "_errors", frozen)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ValidationResult is immutable")

    # --- Factories ------------------------------------------------------------

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls._VALID

    @classmethod
    def invalid(cls, field: str, code: str, message: str) -> "ValidationResult":
        _check_field_name(field)
        return cls(False, {field: [ValidationError(code=code, message=message)]})

    @classmethod
    def invalid_error(cls, field: str, error: ValidationError) -> "ValidationResult":
        _check_field_name(field)
        return cls(False, {field: [error]})

    @classmethod
    def invalid_errors(
        cls, field: str, errors: Iterable[ValidationError],
    ) -> "ValidationResult":
        _check_field_name(field)
        return cls(False, {field: list(errors)})

    @classmethod
    def invalid_map(cls, errors: ErrorMap) -> "ValidationResult":
        if errors is None:
            raise TypeError("Error map cannot be None")
        return cls(False, errors)

    @classmethod
    def invalid_multi(cls, field_messages: Mapping[str, str]) -> "ValidationResult":
        """One default error per field; the field name doubles as the code."""
        if field_messages is None:
            raise TypeError("Field messages cannot be None")
        return cls(False, {
            field: [ValidationError(code=field, message=message)]
            for field, message in field_messages.items()
        })

    @classmethod
    def from_errors(
        cls, field: str, errors: Iterable[ValidationError],
    ) -> "ValidationResult":
        """valid() when errors is empty, otherwise invalid_errors(field, errors)."""
        errors = list(errors)
        if not errors:
            _check_field_name(field)
            return cls.valid()
        return cls.invalid_errors(field, errors)

    @classmethod
    def combine_all(cls, results: Iterable["ValidationResult"]) -> "ValidationResult":
        return reduce(lambda acc, nxt: acc.combine(nxt), results, cls.valid())

    # --- Combination ----------------------------------------------------------

    def combine(self, other: "ValidationResult") -> "ValidationResult":
        if not isinstance(other, ValidationResult):
            raise TypeError(
                f"Cannot combine ValidationResult with {type(other).__name__}",
            )
        if self._valid and other._valid:
            return ValidationResult.valid()
        return ValidationResult(False, _merge_errors(self._errors, other._errors))

    def __add__(self, other: "ValidationResult") -> "ValidationResult":
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.combine(other)

    # --- Queries --------------------------------------------------------------

    @property
    def is_valid(self) -> bool:
        return self._valid

    @property
    def errors(self) -> Mapping[str, tuple[ValidationError, ...]]:
        return MappingProxyType(self._errors)

    @property
    def error_count(self) -> int:
        return sum(len(errs) for errs in self._errors.values())

    def errors_for_field(self, field: str) -> tuple[ValidationError, ...]:
        return self._errors.get(field, ())

    def has_errors_for_field(self, field: str) -> bool:
        return bool(self._errors.get(field))

    def contains_error(self, field: str, message: str) -> bool:
        """Exact, case-sensitive message match within one field."""
        if message is None:
            raise TypeError("Error message cannot be None")
        return any(err.message == message for err in self._errors.get(field, ()))

    def contains_error_code(self, code: str) -> bool:
        code = _code_value(code)
        return any(err.code == code for _, err in self.iter_errors())

    def field_has_error_code(self, field: str, code: str) -> bool:
        code = _code_value(code)
        return any(err.code == code for err in self._errors.get(field, ()))

    def iter_errors(self) -> Iterator[tuple[str, ValidationError]]:
        """Yield (field, error) pairs in insertion order."""
        for field, field_errors in self._errors.items():
            for error in field_errors:
                yield field, error

    def all_error_messages(self) -> list[str]:
        return [err.message for _, err in self.iter_errors()]

    def all_error_codes(self) -> list[str]:
        """Distinct codes in first-occurrence order."""
        return list(dict.fromkeys(err.code for _, err in self.iter_errors()))

    def errors_by_code(self) -> dict[str, list[tuple[str, ValidationError]]]:
        grouped: dict[str, list[tuple[str, ValidationError]]] = {}
        for field, error in self.iter_errors():
            grouped.setdefault(error.code, []).append((field, error))
        return grouped

    def filter_by_error_code(self, *codes: str) -> "ValidationResult":
        """Keep only errors whose code is in codes; valid() if none remain."""
        if not codes:
            raise ValueError("At least one error code must be provided")
        wanted = {_code_value(code) for code in codes}
        filtered = {
            field: [err for err in field_errors if err.code in wanted]
            for field, field_errors in self._errors.items()
        }
        filtered = {field: errs for field, errs in filtered.items() if errs}
        if not filtered:
            return ValidationResult.valid()
        return ValidationResult(False, filtered)

    def to_simple_error_map(self) -> dict[str, str]:
        return {
            field: ", ".join(err.message for err in field_errors)
            for field, field_errors in self._errors.items()
        }

    def formatted_messages(
        self, formatter: Callable[[ValidationError], str],
    ) -> list[str]:
        if formatter is None:
            raise TypeError("Formatter cannot be None")
        return [formatter(err) for _, err in self.iter_errors()]

    # --- Throw path -----------------------------------------------------------

    def raise_if_invalid(self) -> "ValidationResult":
        """Raise ValidationFailed with every message joined by ', '."""
        if not self._valid:
            raise ValidationFailed(
                ", ".join(self.all_error_messages()),
                errors=[err for _, err in self.iter_errors()],
                result=self,
            )
        return self

    # --- Dunder / serialization ------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "valid": self._valid,
            "errors": {
                field: [err.to_dict() for err in field_errors]
                for field, field_errors in self._errors.items()
            },
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self._valid == other._valid and self._errors == other._errors

    def __hash__(self) -> int:
        return hash((self._valid, frozenset(self._errors.items())))

    def __repr__(self) -> str:
        if self._valid:
            return "ValidationResult(valid=True, errors={})"
        rendered = ", ".join(
            f"{field!r}: [{', '.join(str(err) for err in field_errors)}]"
            for field, field_errors in self._errors.items()
        )
        return f"ValidationResult(valid=False, errors={{{rendered}}})"


ValidationResult._VALID = ValidationResult(True)
