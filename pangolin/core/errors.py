"""Error Hierarchy — typed, categorized exceptions for every Pangolin failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (Severity)
    - Structural errors (programmer mistakes) are CRITICAL and never accumulated
    - Business-rule violations travel as data (ValidationResult); ValidationFailed
      is raised only on the explicit throw path (raise_if_invalid, fail-fast validators)
    - to_response() produces a JSON-safe envelope

Design Decisions:
    - Single hierarchy with PangolinError base: callers can catch one type
    - Structural errors also inherit ValueError / LookupError so code written
      against the built-in families keeps working
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity shared by exceptions and accumulated validation errors."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    STRUCTURAL = "structural"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    CONFIGURATION = "configuration"


@dataclass
class ErrorContext:
    """Context attached to a raised error for observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field: str | None = None
    entity: str | None = None
    debug_info: dict[str, Any] | None = None


class PangolinError(Exception):
    """Base exception for all Pangolin errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: Severity = Severity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to a standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field,
                    "entity": self.context.entity,
                },
            }
        }


# ─── Structural Errors (programmer mistakes) ────────────────────

class StructuralError(PangolinError, ValueError):
    """Malformed arguments or state — surfaced immediately, never accumulated."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.STRUCTURAL, Severity.CRITICAL, context,
        )


class MalformedErrorDefinition(StructuralError):
    """A ValidationError was declared with a blank code or message."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "MALFORMED_ERROR_DEFINITION", context)


class InvalidResultState(StructuralError):
    """A ValidationResult whose validity flag disagrees with its errors."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "INVALID_RESULT_STATE", context)


class InvalidFieldName(StructuralError):
    """Field key is not a non-blank, whitespace-free string."""
    def __init__(self, field_name: object, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field_name if isinstance(field_name, str) else None
        super().__init__(
            f"Field name must be a non-blank string without whitespace, got {field_name!r}",
            "INVALID_FIELD_NAME", ctx,
        )
        self.field_name = field_name


class MissingIdentifier(StructuralError):
    """An entity or identifier was built without its value."""
    def __init__(self, entity: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = entity
        super().__init__(f"{entity} ID cannot be null", "MISSING_IDENTIFIER", ctx)


class InvariantViolation(StructuralError):
    """A value object rejected its own constructor arguments."""
    def __init__(
        self, message: str, errors: list | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Record validation failed: {message}", "INVARIANT_VIOLATION", context,
        )
        self.errors = list(errors or [])


class EitherAccessError(PangolinError, LookupError):
    """The requested side of an Either is not present."""
    def __init__(self, side: str):
        super().__init__(
            f"No {side} value present", "EITHER_ACCESS",
            ErrorCategory.STRUCTURAL, Severity.CRITICAL,
        )
        self.side = side


class ExecutorNotRegistered(PangolinError, LookupError):
    """No command executor registered for the command type."""
    def __init__(self, command_type: type):
        super().__init__(
            f"No executor registered for command type: {command_type.__name__}",
            "EXECUTOR_NOT_REGISTERED", ErrorCategory.CONFIGURATION,
            Severity.CRITICAL,
        )
        self.command_type = command_type


# ─── Business-rule throw path ───────────────────────────────────

class ValidationFailed(PangolinError):
    """Raised only where a caller opted into fail-fast validation.

    `errors` holds the ValidationError instances that led to the failure and
    `result` the aggregate when raised from ValidationResult.raise_if_invalid().
    """
    def __init__(
        self,
        message: str,
        errors: list | None = None,
        result: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            Severity.ERROR, context,
        )
        self.errors = list(errors or [])
        self.result = result
