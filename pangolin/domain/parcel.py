"""Parcel — an installment of a wallet, created through validated construction.

Invariants:
    - Parcel.create never raises for business rules; returns Either[ValidationResult, Parcel]
    - Every parcel rule reports under the "parcels" field with code PARCEL_INVALID
    - A missing ParcelId is a programmer error (raises MissingIdentifier)
    - Ordering: due date, then amount, then rate; equality and hash by id
"""

from datetime import date
from decimal import ROUND_HALF_EVEN, Decimal
from functools import total_ordering

from pangolin.config import Settings
from pangolin.core.domain_types import (
    BUSINESS_YEAR_DAYS,
    MAX_PARCEL_RATE,
    PARCELS_AMOUNT_NOT_NULL_MESSAGE,
    PARCELS_DUE_DATE_NOT_NULL_MESSAGE,
    PARCELS_KEY,
    PARCELS_RATE_RANGE_MESSAGE,
    ErrorCode,
)
from pangolin.core.either import Either
from pangolin.core.entity import Entity, EntityId
from pangolin.core.errors import MissingIdentifier
from pangolin.core.record_validation import validate_or_raise
from pangolin.core.validation_error import ValidationError
from pangolin.core.validation_result import ValidationResult
from pangolin.core.validators import NOT_NULL_NOR_BLANK


class ParcelId(EntityId[str]):
    """Non-blank string identifier of a parcel."""

    def __init__(self, value: str):
        if value is None:
            raise MissingIdentifier("Parcel")
        super().__init__(validate_or_raise(value, NOT_NULL_NOR_BLANK))


def _parcel_error(message: str) -> ValidationError:
    return ValidationError(code=ErrorCode.PARCEL_INVALID, message=message)


def validate_parcel(
    amount: Decimal | None,
    due_date: date | None,
    rate: float,
    max_rate: float = MAX_PARCEL_RATE,
) -> ValidationResult:
    errors: list[ValidationError] = []
    if amount is None:
        errors.append(_parcel_error(PARCELS_AMOUNT_NOT_NULL_MESSAGE))
    if due_date is None:
        errors.append(_parcel_error(PARCELS_DUE_DATE_NOT_NULL_MESSAGE))
    if rate is None or rate <= 0 or rate > max_rate:
        errors.append(_parcel_error(PARCELS_RATE_RANGE_MESSAGE.format(limit=max_rate)))
    return ValidationResult.from_errors(PARCELS_KEY, errors)


@total_ordering
class Parcel(Entity[ParcelId]):
    """Installment with amount, due date and interest rate."""

    def __init__(
        self,
        parcel_id: ParcelId,
        amount: Decimal,
        due_date: date,
        rate: float,
        validation: ValidationResult,
    ):
        super().__init__(parcel_id)
        self.amount = amount
        self.due_date = due_date
        self.rate = rate
        self.validation = validation

    @classmethod
    def create(
        cls,
        parcel_id: ParcelId,
        amount: Decimal | None,
        due_date: date | None,
        rate: float,
        *,
        max_rate: float = MAX_PARCEL_RATE,
    ) -> Either[ValidationResult, "Parcel"]:
        if parcel_id is None:
            raise MissingIdentifier("Parcel")
        result = validate_parcel(amount, due_date, rate, max_rate)
        if not result.is_valid:
            return Either.left(result)
        return Either.right(cls(parcel_id, amount, due_date, rate, result))

    @classmethod
    def create_with_settings(
        cls,
        parcel_id: ParcelId,
        amount: Decimal | None,
        due_date: date | None,
        rate: float,
        settings: Settings,
    ) -> Either[ValidationResult, "Parcel"]:
        return cls.create(parcel_id, amount, due_date, rate, max_rate=settings.max_parcel_rate)

    def present_value(self, discount_rate: Decimal, contract_date: date) -> Decimal:
        """Discount the amount back to contract_date on a 360-day business year.

        Only whole years of the period compound, matching the contract terms.
        """
        if discount_rate < 0:
            raise ValueError("Discount rate cannot be negative")
        if self.due_date < contract_date:
            raise ValueError("Due date cannot be before contract date")
        days = (self.due_date - contract_date).days
        period = Decimal(days) / Decimal(BUSINESS_YEAR_DAYS)
        denominator = (Decimal(1) + Decimal(discount_rate)) ** int(period)
        return (Decimal(self.amount) / denominator).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_EVEN,
        )

    def _sort_key(self) -> tuple:
        return (self.due_date, self.amount, self.rate)

    def __lt__(self, other: "Parcel") -> bool:
        if not isinstance(other, Parcel):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Parcel):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"Parcel(id={self.id}, amount={self.amount}, "
            f"due_date={self.due_date.isoformat()}, rate={self.rate})"
        )
