"""Domain Types — business constants, field keys, codes and message templates.

Invariants:
    - Money is always Decimal, never float
    - Every field key used in a ValidationResult is declared here
    - Message templates are str.format templates; placeholders are named

Design Decisions:
    - Typed identifiers live in the domain as EntityId subclasses, not here
    - str Enums: serialize to JSON without custom encoders
"""

from decimal import Decimal
from enum import Enum


# ─── Business limits ─────────────────────────────────────────────

MIN_ABSOLUTE_BALANCE: Decimal = Decimal("0")
MIN_ALLOWED_BALANCE: Decimal = Decimal("10.00")
MAX_ALLOWED_BALANCE: Decimal = Decimal("1000000.00")
MAX_DECIMAL_PLACES: int = 2
MAX_PARCEL_RATE: float = 100.0
MAX_INSTALLMENT_ID: int = 999_999
BUSINESS_YEAR_DAYS: int = 360

WALLET_ID_PREFIX: str = "WALLET-"
WALLET_ID_MIN_LENGTH: int = 10

# Code used when a rule is declared without one
DEFAULT_ERROR_CODE: str = "99999"


# ─── Field keys ──────────────────────────────────────────────────

BALANCE_KEY = "balance"
PARCELS_KEY = "parcels"
AMOUNT_KEY = "amount"
TARGET_WALLET_KEY = "target_wallet_id"
CONTRACT_NUMBER_KEY = "contract_number"
INSTALLMENTS_KEY = "installments"
TRANSACTION_ID_KEY = "transaction_id"


# ─── Error codes ─────────────────────────────────────────────────

class ErrorCode(str, Enum):
    """Codes bound to business rules. Values are what ends up in results."""
    VALUE_NULL = "VALUE_NULL"
    VALUE_BLANK = "VALUE_BLANK"
    VALUE_NEGATIVE = "VALUE_NEGATIVE"
    VALUE_NOT_POSITIVE = "VALUE_NOT_POSITIVE"
    VALUE_TOO_SMALL = "VALUE_TOO_SMALL"
    VALUE_TOO_LARGE = "VALUE_TOO_LARGE"
    VALUE_SCALE = "VALUE_SCALE"
    VALUE_DUPLICATED = "VALUE_DUPLICATED"
    VALUE_CONFLICT = "VALUE_CONFLICT"
    COLLECTION_EMPTY = "COLLECTION_EMPTY"
    ID_PREFIX = "ID_PREFIX"
    ID_TOO_SHORT = "ID_TOO_SHORT"
    ID_NO_DIGIT = "ID_NO_DIGIT"
    BALANCE_INVALID = "BALANCE_INVALID"
    PARCEL_INVALID = "PARCEL_INVALID"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    SAME_WALLET = "SAME_WALLET"
    DUPLICATE_TRANSACTION = "DUPLICATE_TRANSACTION"
    INSTALLMENT_ID_INVALID = "INSTALLMENT_ID_INVALID"
    FATAL_ERROR = "FATAL_ERROR"


# ─── Message templates ───────────────────────────────────────────

BALANCE_NOT_NULL_MESSAGE = "The balance is mandatory."
BALANCE_ABOVE_MAX_MESSAGE = "The balance above the maximum {limit} allowed limit."
BALANCE_BELOW_MIN_MESSAGE = "The balance below the minimum {limit} allowed limit."
PARCELS_DUE_DATE_NOT_NULL_MESSAGE = "The contracted due date is mandatory."
PARCELS_AMOUNT_NOT_NULL_MESSAGE = "The contracted amount is mandatory."
PARCELS_RATE_RANGE_MESSAGE = "Rate must be between 0 and {limit:g}"
TRANSFER_AMOUNT_MESSAGE = "Transfer amount must be greater than zero"
TRANSFER_SAME_WALLET_MESSAGE = "Source and target wallets must differ"
DUPLICATE_TRANSACTION_MESSAGE = "A transaction with the same ID already exists"
INSTALLMENT_ID_MESSAGE = "Installment ID must be a number less than or equal to {limit}"
INSTALLMENT_DUE_DATE_MESSAGE = "Installment due date cannot be null"


# ─── Enums ───────────────────────────────────────────────────────

class TransactionType(str, Enum):
    TRANSFER = "TRANSFER"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class TransactionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    PENDING = "PENDING"
    REVERSED = "REVERSED"
