"""Transfer — move an amount between two wallets through the command runner.

Invariants:
    - amount must be > 0 (INVALID_AMOUNT under "amount")
    - source and target wallets must differ (SAME_WALLET under "target_wallet_id")
    - Both rules are always evaluated; errors accumulate
    - The receipt echoes the command's wallets, amount and fee
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from pangolin.core.domain_types import (
    AMOUNT_KEY,
    TARGET_WALLET_KEY,
    TRANSFER_AMOUNT_MESSAGE,
    TRANSFER_SAME_WALLET_MESSAGE,
    ErrorCode,
    TransactionStatus,
    TransactionType,
)
from pangolin.core.either import Either
from pangolin.core.validation_collector import ValidationCollector
from pangolin.core.validation_result import ValidationResult
from pangolin.core.validator import Validator
from pangolin.core.validators import GREATER_THAN_ZERO
from pangolin.domain.commands import CommandExecutor, validate_model
from pangolin.domain.wallet import WalletId


@dataclass(frozen=True)
class TransferCommand:
    source_wallet_id: WalletId
    target_wallet_id: WalletId
    amount: Decimal
    fee: Decimal = Decimal("0")


@dataclass(frozen=True)
class TransactionReceipt:
    source_wallet_id: str
    target_wallet_id: str | None
    amount: Decimal
    transaction_type: TransactionType
    status: TransactionStatus = TransactionStatus.SUCCESS
    fee: Decimal = Decimal("0")
    transaction_id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_display_string(self) -> str:
        return (
            f"Transaction ID: {self.transaction_id}\n"
            f"Type: {self.transaction_type.value}\n"
            f"Status: {self.status.value}\n"
            f"Amount: {self.amount:.2f}\n"
            f"Fee: {self.fee:.2f}\n"
            f"From: {self.source_wallet_id}\n"
            f"To: {self.target_wallet_id or 'N/A'}\n"
            f"Timestamp: {self.timestamp.isoformat()}\n"
        )


_POSITIVE_AMOUNT: Validator[Decimal] = Validator.of(
    GREATER_THAN_ZERO.is_satisfied_by,
    TRANSFER_AMOUNT_MESSAGE,
    code=ErrorCode.INVALID_AMOUNT,
)

_DISTINCT_WALLETS: Validator[TransferCommand] = Validator.of(
    lambda cmd: cmd.source_wallet_id != cmd.target_wallet_id,
    TRANSFER_SAME_WALLET_MESSAGE,
    code=ErrorCode.SAME_WALLET,
)


def validate_transfer(command: TransferCommand) -> ValidationResult:
    return (
        ValidationCollector()
        .check(AMOUNT_KEY, command.amount, _POSITIVE_AMOUNT)
        .check(TARGET_WALLET_KEY, command, _DISTINCT_WALLETS)
        .result
    )


def validate_transfer_command(
    command: TransferCommand,
) -> Either[ValidationResult, TransferCommand]:
    return validate_model(command, validate_transfer)


class TransferExecutor(CommandExecutor[TransferCommand, TransactionReceipt]):

    def validate_business_rules(self, command: TransferCommand) -> ValidationResult:
        if command is None:
            raise TypeError("TransferCommand cannot be None")
        return validate_transfer(command)

    def execute(self, command: TransferCommand) -> TransactionReceipt:
        if command is None:
            raise TypeError("TransferCommand cannot be None")
        return TransactionReceipt(
            source_wallet_id=str(command.source_wallet_id),
            target_wallet_id=str(command.target_wallet_id),
            amount=command.amount,
            transaction_type=TransactionType.TRANSFER,
            fee=command.fee,
        )
