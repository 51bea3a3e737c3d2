"""Validator — first-class rule: value in, ordered list of ValidationError out.

Invariants:
    - A validator is a pure function; running it twice gives equal errors
    - An empty list means the value passes
    - Ordinary failures are returned, never raised
    - and_ runs left then right on the SAME value and concatenates in that order;
      if any produced error is must_raise, ValidationFailed is raised carrying the
      first such error's message (fail-fast flavour)
    - Combinators return new validators; operands are never mutated

Design Decisions:
    - Two flavours, chosen per rule: accumulating (must_raise=False, the default)
      for business rules, fail-fast (must_raise=True) for structural invariants
    - evolve_to is typing-only narrowing: identical runtime behaviour
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Iterable, TypeVar

from pangolin.core.domain_types import DEFAULT_ERROR_CODE
from pangolin.core.errors import ValidationFailed
from pangolin.core.validation_error import ValidationError
from pangolin.core.validation_result import ValidationResult

T = TypeVar("T")
U = TypeVar("U")

ValidateFn = Callable[[Any], Iterable[ValidationError]]


class Validator(Generic[T]):
    """Wraps a callable T -> list[ValidationError]."""

    __slots__ = ("_fn", "name")

    def __init__(self, fn: ValidateFn, name: str | None = None):
        if not callable(fn):
            raise TypeError("Validator requires a callable")
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "validator")

    def validate(self, value: T) -> list[ValidationError]:
        return list(self._fn(value))

    __call__ = validate

    def __repr__(self) -> str:
        return f"Validator({self.name})"

    # --- Factories ------------------------------------------------------------

    @classmethod
    def of(
        cls,
        predicate: Callable[[T], bool],
        message: str,
        *,
        code: str = DEFAULT_ERROR_CODE,
        must_raise: bool = False,
        **metadata: Any,
    ) -> "Validator[T]":
        """One error when predicate(value) is falsy.

        Exceptions raised by the predicate propagate; rules that accept None
        must say so in the predicate. Each failure gets a freshly stamped error.
        """
        if predicate is None:
            raise TypeError("Predicate cannot be None")
        # built eagerly: a malformed code/message fails at declaration time
        template = ValidationError(
            code=code, message=message, metadata=metadata, must_raise=must_raise,
        )

        def run(value: T) -> list[ValidationError]:
            if predicate(value):
                return []
            return [replace(template, timestamp=datetime.now(timezone.utc))]

        return cls(run, name=template.code)

    @classmethod
    def fail_fast(
        cls,
        predicate: Callable[[T], bool],
        message: str,
        *,
        code: str = DEFAULT_ERROR_CODE,
        **metadata: Any,
    ) -> "Validator[T]":
        return cls.of(predicate, message, code=code, must_raise=True, **metadata)

    @classmethod
    def from_function(cls, fn: "ValidateFn | Validator[Any]") -> "Validator[T]":
        """Adopt a plain callable, or reuse a supertype validator as-is."""
        if isinstance(fn, Validator):
            return cls(fn._fn, name=fn.name)
        return cls(fn)

    @classmethod
    def always_valid(cls) -> "Validator[T]":
        return cls(lambda value: [], name="always_valid")

    @classmethod
    def all_of(cls, *validators: "Validator[Any]") -> "Validator[T]":
        combined: Validator[T] = cls.always_valid()
        for validator in validators:
            combined = combined.and_(validator)
        return combined

    # --- Combinators ----------------------------------------------------------

    def and_(self, other: "Validator[Any]") -> "Validator[T]":
        if other is None:
            raise TypeError("Other validator cannot be None")
        first, second = self._fn, other._fn

        def run(value: T) -> list[ValidationError]:
            errors = list(first(value)) + list(second(value))
            flagged = next((err for err in errors if err.must_raise), None)
            if flagged is not None:
                raise ValidationFailed(flagged.message, errors=errors)
            return errors

        return Validator(run, name=f"{self.name}&{other.name}")

    def __and__(self, other: "Validator[Any]") -> "Validator[T]":
        if not isinstance(other, Validator):
            return NotImplemented
        return self.and_(other)

    def evolve_to(self, target_type: type[U] | None = None) -> "Validator[U]":
        if target_type is not None and not isinstance(target_type, type):
            raise TypeError("Target type must be a class")
        return Validator(self._fn, name=self.name)

    # --- Bridges --------------------------------------------------------------

    def validate_field(self, field: str, value: T) -> ValidationResult:
        return ValidationResult.from_errors(field, self.validate(value))

    def is_satisfied_by(self, value: T) -> bool:
        return not self.validate(value)


def evolve_validator(validator: Validator[T], target_type: type[U]) -> Validator[U]:
    if target_type is None:
        raise TypeError("Target type cannot be None")
    return validator.evolve_to(target_type)
