"""Contract wallet tests — opening a wallet from a contract event.

Tests cover:
    - Valid event -> Right(ContractWallet) with installments in event order
    - Empty installments, malformed contract number and bad installments all
      reported together; installment errors tagged with the installment id
    - Missing contract number reported as data, not raised
    - Installment ids must be ASCII digits; other Unicode digits are reported
    - InstallmentId / ContractWalletId / Installment fail-fast constructors
    - OpenContractWalletExecutor through the registry
"""

import logging
from datetime import date
from decimal import Decimal

import pytest

from pangolin.core.errors import InvariantViolation
from pangolin.domain.commands import ExecutorRegistry
from pangolin.domain.contract_wallet import (
    ContractWallet,
    ContractWalletId,
    Installment,
    InstallmentId,
    OpenContractWalletExecutor,
    validate_contract_event,
)
from pangolin.schemas.contract_event import ContractEvent


def _event(contract_number: str | None = "WALLET-123", installments: list | None = None) -> ContractEvent:
    if installments is None:
        installments = [
            {"id": "1", "amount": "100.00", "due_date": "2025-01-10"},
            {"id": "2", "amount": "150.50", "due_date": "2025-02-10"},
        ]
    return ContractEvent(contract_number=contract_number, installments=installments)


# --- open ---------------------------------------------------------------------

def test_open_valid_event():
    outcome = ContractWallet.open(_event())
    assert outcome.is_right
    wallet = outcome.right_value
    assert wallet.id == ContractWalletId("WALLET-123")
    assert [inst.id.value for inst in wallet.installments] == ["1", "2"]
    assert wallet.total_amount == Decimal("250.50")


def test_open_logs_outcome(caplog):
    with caplog.at_level(logging.INFO, logger="pangolin.domain.contract_wallet"):
        ContractWallet.open(_event(contract_number="WALLET-"))
    assert caplog.records[-1].entity_id == "WALLET-"


def test_empty_installments_reported():
    result = ContractWallet.open(_event(installments=[])).left_value
    assert result.field_has_error_code("installments", "COLLECTION_EMPTY")


def test_every_violation_reported_together():
    event = _event(
        contract_number="WALLET-",
        installments=[{"id": "ABC", "amount": "0", "due_date": "2025-01-10"}],
    )
    result = validate_contract_event(event)
    assert list(result.errors) == ["contract_number", "installments"]
    assert [e.code for e in result.errors_for_field("contract_number")] == [
        "ID_TOO_SHORT", "ID_NO_DIGIT",
    ]
    installment_errors = result.errors_for_field("installments")
    assert [e.code for e in installment_errors] == ["INSTALLMENT_ID_INVALID", "VALUE_NOT_POSITIVE"]
    assert {e.metadata["installment_id"] for e in installment_errors} == {"ABC"}


def test_installment_id_above_limit():
    event = _event(installments=[{"id": "1000000", "amount": "1", "due_date": "2025-01-10"}])
    result = validate_contract_event(event)
    assert result.contains_error(
        "installments", "Installment ID must be a number less than or equal to 999999",
    )


@pytest.mark.parametrize("installment_id", ["\u00b2", "\u0663", "12\u00b3"])
def test_non_ascii_digit_installment_id_reported(installment_id):
    event = _event(installments=[{"id": installment_id, "amount": "1", "due_date": "2025-01-10"}])
    outcome = ContractWallet.open(event)
    assert outcome.left_value.field_has_error_code("installments", "INSTALLMENT_ID_INVALID")


def test_installment_amount_scale():
    event = _event(installments=[{"id": "1", "amount": "1.005", "due_date": "2025-01-10"}])
    assert validate_contract_event(event).contains_error_code("VALUE_SCALE")


def test_missing_contract_number_is_data():
    result = ContractWallet.open(_event(contract_number=None)).left_value
    assert result.field_has_error_code("contract_number", "VALUE_NULL")


def test_open_none_raises():
    with pytest.raises(TypeError):
        ContractWallet.open(None)


def test_wallets_equal_by_id():
    first = ContractWallet.open(_event()).right_value
    second = ContractWallet.open(
        _event(installments=[{"id": "9", "amount": "1", "due_date": "2025-01-01"}]),
    ).right_value
    assert first == second


# --- Fail-fast constructors ---------------------------------------------------

def test_installment_id_rejects_non_numeric():
    with pytest.raises(InvariantViolation):
        InstallmentId("ABC")
    assert InstallmentId("999999").value == "999999"


def test_contract_wallet_id_rejects_malformed():
    with pytest.raises(InvariantViolation):
        ContractWalletId("WALLET-")
    with pytest.raises(InvariantViolation):
        ContractWalletId(None)


def test_installment_rejects_non_positive_amount():
    with pytest.raises(InvariantViolation):
        Installment(id=InstallmentId("1"), amount=Decimal("0"), due_date=date(2025, 1, 1))


def test_installments_equal_by_id():
    first = Installment(id=InstallmentId("1"), amount=Decimal("1"), due_date=date(2025, 1, 1))
    second = Installment(id=InstallmentId("1"), amount=Decimal("2"), due_date=date(2025, 2, 1))
    assert first == second
    assert hash(first) == hash(second)


# --- Executor -----------------------------------------------------------------

def test_executor_through_registry():
    registry = ExecutorRegistry().register(ContractEvent, OpenContractWalletExecutor)
    assert registry.dispatch(_event()).right_value.id == ContractWalletId("WALLET-123")
    assert registry.dispatch(_event(installments=[])).is_left
