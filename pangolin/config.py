"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Defaults equal the constants in core.domain_types
    - max_allowed_balance > min_allowed_balance
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - PANGOLIN_ prefix keeps variables from colliding with the host application
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pangolin.core.domain_types import (
    MAX_ALLOWED_BALANCE,
    MAX_PARCEL_RATE,
    MIN_ALLOWED_BALANCE,
    WALLET_ID_MIN_LENGTH,
    WALLET_ID_PREFIX,
)


class Settings(BaseSettings):
    """Business limits and observability settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PANGOLIN_", env_file=".env", case_sensitive=False,
    )

    # Wallet balance bounds
    min_allowed_balance: Decimal = MIN_ALLOWED_BALANCE
    max_allowed_balance: Decimal = MAX_ALLOWED_BALANCE

    # Wallet identifier format
    wallet_id_prefix: str = WALLET_ID_PREFIX
    wallet_id_min_length: int = WALLET_ID_MIN_LENGTH

    # Installments
    max_parcel_rate: float = MAX_PARCEL_RATE

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("wallet_id_prefix")
    @classmethod
    def prefix_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("wallet_id_prefix cannot be blank")
        return v

    @field_validator("log_format")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @model_validator(mode="after")
    def balance_bounds_ordered(self) -> "Settings":
        if self.max_allowed_balance <= self.min_allowed_balance:
            raise ValueError("max_allowed_balance must exceed min_allowed_balance")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
