"""Record Validation — fail-fast helpers for value-object constructors.

Invariants:
    - Any error (accumulated or fail-fast) becomes InvariantViolation
    - Used only for structural invariants that correct code never violates;
      business rules go through ValidationResult / Either instead
"""

from typing import Any, Sequence, TypeVar

from pangolin.core.errors import InvariantViolation, ValidationFailed
from pangolin.core.validator import Validator

T = TypeVar("T")


def validate_or_raise(value: T, validator: Validator[T]) -> T:
    """Run validator; raise InvariantViolation on any error, else return value."""
    try:
        errors = validator.validate(value)
    except ValidationFailed as exc:
        raise InvariantViolation(exc.message, errors=exc.errors) from exc
    if errors:
        raise InvariantViolation(
            ", ".join(err.message for err in errors), errors=errors,
        )
    return value


def validate_list(items: Sequence[T], validator: Validator[Sequence[T]]) -> tuple[T, ...]:
    """Validate the whole sequence, then hand back an immutable copy."""
    validate_or_raise(items, validator)
    return tuple(items)


def validate_string(value: str, *validators: Validator[Any]) -> str:
    return validate_or_raise(value, Validator.all_of(*validators))
