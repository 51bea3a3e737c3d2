"""Transaction — a money movement checked against the transactions running with it.

Invariants:
    - Constructor is fail-fast: blank id, non-positive amount or an id shared with a
      concurrent transaction raise InvariantViolation
    - validate_batch is the accumulating counterpart: one DUPLICATE_TRANSACTION error
      per repeated id under "transaction_id", never raises
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from pangolin.core.domain_types import (
    DUPLICATE_TRANSACTION_MESSAGE,
    TRANSACTION_ID_KEY,
    ErrorCode,
)
from pangolin.core.record_validation import validate_or_raise
from pangolin.core.validation_error import ValidationError
from pangolin.core.validation_result import ValidationResult
from pangolin.core.validators import GREATER_THAN_ZERO, NOT_NULL_NOR_BLANK, none_match


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction; concurrent holds the batch it was submitted with."""
    id: str
    amount: Decimal
    concurrent: tuple["Transaction", ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "concurrent", tuple(self.concurrent))
        validate_or_raise(self.id, NOT_NULL_NOR_BLANK)
        validate_or_raise(self.amount, GREATER_THAN_ZERO)
        validate_or_raise(
            self,
            none_match(
                self.concurrent,
                lambda other: other.id == self.id,
                DUPLICATE_TRANSACTION_MESSAGE,
            ),
        )

    @staticmethod
    def validate_batch(batch: Iterable["Transaction"]) -> ValidationResult:
        counts = Counter(tx.id for tx in batch)
        errors = [
            ValidationError.of(
                ErrorCode.DUPLICATE_TRANSACTION,
                DUPLICATE_TRANSACTION_MESSAGE,
                transaction_id=tx_id, occurrences=count,
            )
            for tx_id, count in counts.items()
            if count > 1
        ]
        return ValidationResult.from_errors(TRANSACTION_ID_KEY, errors)
