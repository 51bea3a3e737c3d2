"""Contract Wallet — wallet opened from a signed-contract event.

Invariants:
    - ContractWallet.open returns Either[ValidationResult, ContractWallet]; only a
      None event raises
    - Every rule is evaluated before deciding: "installments" must be non-empty and
      each installment well-formed; "contract_number" must satisfy the wallet id rules
    - Installment and ContractWalletId constructors are fail-fast (InvariantViolation);
      open() validates the same rules first, so a valid event never trips them

Design Decisions:
    - Accumulating checks go through ValidationCollector keyed by event field
    - Installment errors carry the installment id in metadata
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence

from pangolin.core.domain_types import (
    CONTRACT_NUMBER_KEY,
    INSTALLMENT_DUE_DATE_MESSAGE,
    INSTALLMENT_ID_MESSAGE,
    INSTALLMENTS_KEY,
    MAX_DECIMAL_PLACES,
    MAX_INSTALLMENT_ID,
    ErrorCode,
)
from pangolin.core.either import Either
from pangolin.core.entity import Entity, EntityId
from pangolin.core.errors import MissingIdentifier
from pangolin.core.record_validation import validate_or_raise
from pangolin.core.validation_collector import ValidationCollector
from pangolin.core.validation_result import ValidationResult
from pangolin.core.validator import Validator
from pangolin.core.validators import (
    GREATER_THAN_ZERO,
    NOT_NULL_NOR_BLANK,
    at_most_decimal_places,
    non_empty_list,
    wallet_id,
    wallet_id_accumulating,
)
from pangolin.domain.commands import CommandExecutor
from pangolin.schemas.contract_event import ContractEvent, ContractEventInstallment

logger = logging.getLogger(__name__)


_ASCII_DIGITS = re.compile(r"[0-9]+")

_INSTALLMENT_ID_RULE: Validator[str] = NOT_NULL_NOR_BLANK & Validator.of(
    lambda value: value is not None
    and _ASCII_DIGITS.fullmatch(value) is not None
    and int(value) <= MAX_INSTALLMENT_ID,
    INSTALLMENT_ID_MESSAGE.format(limit=MAX_INSTALLMENT_ID),
    code=ErrorCode.INSTALLMENT_ID_INVALID,
)

_DUE_DATE_RULE: Validator[date] = Validator.of(
    lambda value: value is not None,
    INSTALLMENT_DUE_DATE_MESSAGE,
    code=ErrorCode.VALUE_NULL,
)

_AMOUNT_RULE: Validator[Decimal] = GREATER_THAN_ZERO & at_most_decimal_places(MAX_DECIMAL_PLACES)


class InstallmentId(EntityId[str]):
    """Numeric string id, at most 999999."""

    def __init__(self, value: str):
        if value is None:
            raise MissingIdentifier("Installment")
        super().__init__(validate_or_raise(value, _INSTALLMENT_ID_RULE))


class ContractWalletId(EntityId[str]):
    """Contract number used as wallet id; format rules are fail-fast on None."""

    def __init__(self, value: str):
        super().__init__(validate_or_raise(value, wallet_id(ErrorCode.FATAL_ERROR)))


@dataclass(frozen=True, eq=False)
class Installment:
    id: InstallmentId
    amount: Decimal
    due_date: date
    outstanding_balance: Decimal = Decimal("0")
    amortized_balance: Decimal = Decimal("0")

    def __post_init__(self):
        if self.id is None:
            raise MissingIdentifier("Installment")
        validate_or_raise(self.due_date, _DUE_DATE_RULE)
        validate_or_raise(self.amount, _AMOUNT_RULE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Installment):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def _validate_installment(installment: ContractEventInstallment) -> ValidationResult:
    errors = (
        _INSTALLMENT_ID_RULE.validate(installment.id)
        + _DUE_DATE_RULE.validate(installment.due_date)
        + _AMOUNT_RULE.validate(installment.amount)
    )
    tagged = [err.with_metadata("installment_id", installment.id) for err in errors]
    return ValidationResult.from_errors(INSTALLMENTS_KEY, tagged)


def validate_contract_event(event: ContractEvent) -> ValidationResult:
    collector = (
        ValidationCollector()
        .check(INSTALLMENTS_KEY, event.installments, non_empty_list())
        .check(CONTRACT_NUMBER_KEY, event.contract_number, wallet_id_accumulating())
    )
    for installment in event.installments:
        collector.merge(_validate_installment(installment))
    return collector.result


class ContractWallet(Entity[ContractWalletId]):
    """Wallet created for a contract, holding its installments in event order."""

    def __init__(
        self,
        wallet_id: ContractWalletId,
        installments: Sequence[Installment],
        validation: ValidationResult,
    ):
        super().__init__(wallet_id)
        self.installments = tuple(installments)
        self.validation = validation

    @classmethod
    def open(cls, event: ContractEvent) -> Either[ValidationResult, "ContractWallet"]:
        if event is None:
            raise TypeError("Contract event cannot be None")
        result = validate_contract_event(event)
        if not result.is_valid:
            logger.info(
                f"Contract wallet rejected: {result.error_count} error(s)",
                extra={
                    "entity_id": event.contract_number,
                    "error_code": ",".join(result.all_error_codes()),
                    "error_count": result.error_count,
                },
            )
            return Either.left(result)
        wallet = cls._build(event, result)
        logger.info(
            f"Contract wallet opened with {len(wallet.installments)} installment(s)",
            extra={"entity_id": str(wallet.id)},
        )
        return Either.right(wallet)

    @classmethod
    def _build(cls, event: ContractEvent, result: ValidationResult) -> "ContractWallet":
        installments = [
            Installment(
                id=InstallmentId(item.id),
                amount=item.amount,
                due_date=item.due_date,
            )
            for item in event.installments
        ]
        return cls(ContractWalletId(event.contract_number), installments, result)

    @property
    def total_amount(self) -> Decimal:
        return sum((inst.amount for inst in self.installments), Decimal("0"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContractWallet):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class OpenContractWalletExecutor(CommandExecutor[ContractEvent, ContractWallet]):
    """Runs contract-wallet opening through the shared command runner."""

    def validate_business_rules(self, command: ContractEvent) -> ValidationResult:
        if command is None:
            raise TypeError("Contract event cannot be None")
        return validate_contract_event(command)

    def execute(self, command: ContractEvent) -> ContractWallet:
        return ContractWallet._build(command, ValidationResult.valid())
