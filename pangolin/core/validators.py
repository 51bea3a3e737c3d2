"""Validators — stateless library of reusable rule factories.

Invariants:
    - Module holds only constants and pure factory functions, no state
    - Every rule binds a fixed ErrorCode; messages may embed runtime parameters
    - Every rule is accumulating unless its docstring says fail-fast
    - Sign and string rules report None as a failure; ordering, scale and
      collection rules expect a value of the right type and raise otherwise

Design Decisions:
    - Wallet id composite mixes flavours on purpose: null is fail-fast (a
      programmer error), the format rules accumulate so every format problem is
      reported at once. wallet_id_strict() is the all-fail-fast variant.
"""

from decimal import Decimal
from typing import Any, Callable, Collection, Sized

from pangolin.core.domain_types import (
    WALLET_ID_MIN_LENGTH,
    WALLET_ID_PREFIX,
    ErrorCode,
)
from pangolin.core.validator import Validator


# --- Basic value rules ---------------------------------------------------------

NOT_NULL: Validator[Any] = Validator.of(
    lambda value: value is not None,
    "The value cannot be null",
    code=ErrorCode.VALUE_NULL,
)

NOT_BLANK: Validator[str] = Validator.of(
    lambda value: value is not None and bool(value.strip()),
    "The string cannot be blank",
    code=ErrorCode.VALUE_BLANK,
)

NOT_NULL_NOR_BLANK: Validator[str] = NOT_NULL.evolve_to(str) & NOT_BLANK

NON_NEGATIVE: Validator[Any] = Validator.of(
    lambda value: value is not None and value >= 0,
    "The value must be positive",
    code=ErrorCode.VALUE_NEGATIVE,
)

GREATER_THAN_ZERO: Validator[Decimal] = Validator.of(
    lambda value: value is not None and value > 0,
    "The value must be greater than zero",
    code=ErrorCode.VALUE_NOT_POSITIVE,
)


def not_null_nor_blank() -> Validator[str]:
    return NOT_NULL.evolve_to(str).and_(NOT_BLANK)


# --- Ordering rules -------------------------------------------------------------

def greater_than(limit: Any) -> Validator[Any]:
    """value > limit under the value type's natural ordering."""
    if limit is None:
        raise TypeError("Limit cannot be None")
    return Validator.of(
        lambda value: value > limit,
        f"The value must be greater than {limit}",
        code=ErrorCode.VALUE_TOO_SMALL,
        limit=limit,
    )


def less_than_or_equal(limit: Any) -> Validator[Any]:
    if limit is None:
        raise TypeError("Limit cannot be None")
    return Validator.of(
        lambda value: value <= limit,
        f"The value must be at most {limit}",
        code=ErrorCode.VALUE_TOO_LARGE,
        limit=limit,
    )


def at_most_decimal_places(places: int) -> Validator[Decimal]:
    return Validator.of(
        lambda value: -Decimal(value).as_tuple().exponent <= places,
        f"The value must have at most {places} decimal places",
        code=ErrorCode.VALUE_SCALE,
        places=places,
    )


# --- Collection rules -------------------------------------------------------------

def non_empty_list() -> Validator[Sized]:
    return Validator.of(
        lambda items: len(items) > 0,
        "The list cannot be empty",
        code=ErrorCode.COLLECTION_EMPTY,
    )


def not_contained_in(collection: Collection[Any], message: str | None = None) -> Validator[Any]:
    """The value must not already be an element of collection."""
    if collection is None:
        raise TypeError("Collection cannot be None")
    return Validator.of(
        lambda element: element not in collection,
        message or "The element cannot be present in the given collection",
        code=ErrorCode.VALUE_DUPLICATED,
    )


def none_match(
    collection: Collection[Any],
    predicate: Callable[[Any], bool],
    message: str,
) -> Validator[Any]:
    """No element of collection may satisfy predicate (the value is ignored)."""
    if collection is None:
        raise TypeError("Collection cannot be None")
    if predicate is None:
        raise TypeError("Predicate cannot be None")
    return Validator.of(
        lambda _: not any(predicate(item) for item in collection),
        message,
        code=ErrorCode.VALUE_CONFLICT,
    )


# --- String format rules ---------------------------------------------------------

def starts_with(prefix: str, *, must_raise: bool = False) -> Validator[str]:
    return Validator.of(
        lambda value: value is not None and value.startswith(prefix),
        f"ID must start with the '{prefix}' prefix",
        code=ErrorCode.ID_PREFIX,
        must_raise=must_raise,
        prefix=prefix,
    )


def min_length(length: int, *, must_raise: bool = False) -> Validator[str]:
    return Validator.of(
        lambda value: value is not None and len(value) >= length,
        f"ID must be at least {length} characters long",
        code=ErrorCode.ID_TOO_SHORT,
        must_raise=must_raise,
        min_length=length,
    )


def contains_digit(*, must_raise: bool = False) -> Validator[str]:
    return Validator.of(
        lambda value: value is not None and any(ch.isdigit() for ch in value),
        "ID must contain at least one numeric character",
        code=ErrorCode.ID_NO_DIGIT,
        must_raise=must_raise,
    )


# --- Wallet identifier composites ------------------------------------------------

def wallet_id(
    code: str = ErrorCode.VALUE_NULL,
    *,
    prefix: str = WALLET_ID_PREFIX,
    length: int = WALLET_ID_MIN_LENGTH,
) -> Validator[str]:
    """Fail-fast on None (raises ValidationFailed), then accumulate format errors."""
    null_check: Validator[str] = Validator.fail_fast(
        lambda value: value is not None, "ID cannot be null", code=code,
    )
    return null_check.and_(_wallet_id_format(prefix, length, must_raise=False))


def wallet_id_accumulating(
    *, prefix: str = WALLET_ID_PREFIX, length: int = WALLET_ID_MIN_LENGTH,
) -> Validator[str]:
    """Same rules, every one accumulating; None yields a VALUE_NULL error."""
    return NOT_NULL.evolve_to(str).and_(
        _wallet_id_format(prefix, length, must_raise=False),
    )


def wallet_id_strict(
    *, prefix: str = WALLET_ID_PREFIX, length: int = WALLET_ID_MIN_LENGTH,
) -> Validator[str]:
    """Every rule fail-fast: raises with the first violated rule's message."""
    null_check: Validator[str] = Validator.fail_fast(
        lambda value: value is not None, "ID cannot be null",
        code=ErrorCode.VALUE_NULL,
    )
    return null_check.and_(_wallet_id_format(prefix, length, must_raise=True))


def _wallet_id_format(prefix: str, length: int, *, must_raise: bool) -> Validator[str]:
    not_blank: Validator[str] = Validator.of(
        lambda value: value is not None and bool(value.strip()),
        "ID cannot be blank",
        code=ErrorCode.VALUE_BLANK,
        must_raise=must_raise,
    )
    return Validator.all_of(
        not_blank,
        starts_with(prefix, must_raise=must_raise),
        min_length(length, must_raise=must_raise),
        contains_digit(must_raise=must_raise),
    )
