"""Contract Event Schemas — inbound records announcing a newly signed contract.

Invariants:
    - Records are frozen once parsed
    - Strings are stripped; shape/type problems raise pydantic.ValidationError
    - Business rules (wallet id format, installment limits) are NOT checked here;
      ContractWallet.open reports those as a ValidationResult

Design Decisions:
    - Contract number and installments stay lenient (blank / empty allowed) so the
      domain can report every business violation at once
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContractEventInstallment(BaseModel):
    """One installment as announced by the contract event."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(max_length=32)
    amount: Decimal
    due_date: date

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        return v.strip()


class ContractEvent(BaseModel):
    """Contract number plus its installments."""
    model_config = ConfigDict(frozen=True)

    contract_number: str | None = None
    installments: list[ContractEventInstallment] = Field(default_factory=list)

    @field_validator("contract_number")
    @classmethod
    def strip_contract_number(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None
