"""Wallet — validated aggregate of a balance and its parcels.

Invariants:
    - Wallet.create returns Either[ValidationResult, Wallet]; None id or parcels raise
    - Balance tiers are exclusive, so a bad balance yields exactly ONE "balance" error:
        None -> mandatory; < 0 -> below minimum absolute value;
        < min_allowed -> below minimum allowed; > max_allowed -> above maximum
    - Every parcel's stored ValidationResult folds into the aggregate after the balance
    - WalletId must start with the configured prefix and meet the minimum length

Design Decisions:
    - Limits are parameters with domain_types defaults; Wallet.create_with_settings
      reads them from pangolin.config
"""

from decimal import Decimal
from typing import Sequence

from pangolin.config import Settings
from pangolin.core.domain_types import (
    BALANCE_ABOVE_MAX_MESSAGE,
    BALANCE_BELOW_MIN_MESSAGE,
    BALANCE_KEY,
    BALANCE_NOT_NULL_MESSAGE,
    MAX_ALLOWED_BALANCE,
    MIN_ABSOLUTE_BALANCE,
    MIN_ALLOWED_BALANCE,
    WALLET_ID_MIN_LENGTH,
    WALLET_ID_PREFIX,
    ErrorCode,
)
from pangolin.core.either import Either
from pangolin.core.entity import Entity, EntityId
from pangolin.core.errors import MissingIdentifier
from pangolin.core.record_validation import validate_or_raise
from pangolin.core.validation_error import ValidationError
from pangolin.core.validation_result import ValidationResult
from pangolin.core.validators import wallet_id_strict
from pangolin.domain.parcel import Parcel


class WalletId(EntityId[str]):
    """Identifier such as "WALLET-001"; malformed values raise InvariantViolation."""

    def __init__(
        self,
        value: str,
        *,
        prefix: str = WALLET_ID_PREFIX,
        min_length: int = WALLET_ID_MIN_LENGTH,
    ):
        if value is None:
            raise MissingIdentifier("Wallet")
        super().__init__(
            validate_or_raise(value, wallet_id_strict(prefix=prefix, length=min_length)),
        )

    @classmethod
    def from_settings(cls, value: str, settings: Settings) -> "WalletId":
        return cls(
            value,
            prefix=settings.wallet_id_prefix,
            min_length=settings.wallet_id_min_length,
        )


def _balance_error(message: str, **metadata) -> ValidationError:
    return ValidationError(
        code=ErrorCode.BALANCE_INVALID, message=message, metadata=metadata,
    )


def validate_balance(
    balance: Decimal | None,
    min_allowed: Decimal = MIN_ALLOWED_BALANCE,
    max_allowed: Decimal = MAX_ALLOWED_BALANCE,
) -> ValidationResult:
    if balance is None:
        error = _balance_error(BALANCE_NOT_NULL_MESSAGE)
    elif balance < MIN_ABSOLUTE_BALANCE:
        error = _balance_error(
            BALANCE_BELOW_MIN_MESSAGE.format(limit=MIN_ABSOLUTE_BALANCE),
            rule="min_absolute_value", limit=MIN_ABSOLUTE_BALANCE,
        )
    elif balance < min_allowed:
        error = _balance_error(
            BALANCE_BELOW_MIN_MESSAGE.format(limit=min_allowed),
            rule="min_allowed_balance", limit=min_allowed,
        )
    elif balance > max_allowed:
        error = _balance_error(
            BALANCE_ABOVE_MAX_MESSAGE.format(limit=max_allowed),
            rule="max_allowed_balance", limit=max_allowed,
        )
    else:
        return ValidationResult.valid()
    return ValidationResult.invalid_error(BALANCE_KEY, error)


class Wallet(Entity[WalletId]):
    """Balance plus an immutable sequence of parcels."""

    def __init__(
        self,
        wallet_id: WalletId,
        balance: Decimal,
        parcels: Sequence[Parcel],
        validation: ValidationResult,
    ):
        super().__init__(wallet_id)
        self.balance = balance
        self._parcels = tuple(parcels)
        self.validation = validation

    @property
    def parcels(self) -> tuple[Parcel, ...]:
        return self._parcels

    @classmethod
    def create(
        cls,
        wallet_id: WalletId,
        parcels: Sequence[Parcel],
        balance: Decimal | None,
        *,
        min_allowed: Decimal = MIN_ALLOWED_BALANCE,
        max_allowed: Decimal = MAX_ALLOWED_BALANCE,
    ) -> Either[ValidationResult, "Wallet"]:
        if wallet_id is None:
            raise MissingIdentifier("Wallet")
        if parcels is None:
            raise TypeError("Parcels list cannot be None")

        balance_result = validate_balance(balance, min_allowed, max_allowed)
        parcels_result = ValidationResult.combine_all(p.validation for p in parcels)
        result = balance_result.combine(parcels_result)

        if not result.is_valid:
            return Either.left(result)
        return Either.right(cls(wallet_id, balance, parcels, result))

    @classmethod
    def create_with_settings(
        cls,
        wallet_id: WalletId,
        parcels: Sequence[Parcel],
        balance: Decimal | None,
        settings: Settings,
    ) -> Either[ValidationResult, "Wallet"]:
        return cls.create(
            wallet_id, parcels, balance,
            min_allowed=settings.min_allowed_balance,
            max_allowed=settings.max_allowed_balance,
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Wallet):
            return NotImplemented
        return (
            self.id == other.id
            and self.balance == other.balance
            and self._parcels == other._parcels
        )

    def __hash__(self) -> int:
        return hash((self.id, self.balance, self._parcels))

    def __repr__(self) -> str:
        return (
            f"Wallet(id={self.id}, balance={self.balance}, "
            f"parcels={len(self._parcels)}, valid={self.validation.is_valid})"
        )
