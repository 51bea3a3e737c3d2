"""Validation Error — immutable record of a single business-rule violation.

Invariants:
    - code is non-empty, message is non-blank (else MalformedErrorDefinition)
    - metadata is a read-only, insertion-ordered mapping
    - timestamp is assigned at construction (UTC) and excluded from equality
    - must_raise marks fail-fast errors; Validator.and_ raises on the first one

Design Decisions:
    - Frozen dataclass plus with_* copies instead of a fluent builder: a
      ValidationError cannot exist without code and message
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pangolin.core.errors import MalformedErrorDefinition, Severity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidationError:
    """One violation: stable code, human-readable message (or message key)."""

    code: str
    message: str
    metadata: Mapping[str, Any] = field(default_factory=dict)
    severity: Severity = Severity.ERROR
    must_raise: bool = False
    timestamp: datetime = field(default_factory=_utcnow, compare=False)

    def __post_init__(self):
        code = self.code.value if isinstance(self.code, Enum) else self.code
        if not isinstance(code, str) or not code.strip():
            raise MalformedErrorDefinition("Error code is mandatory")
        if not isinstance(self.message, str) or not self.message.strip():
            raise MalformedErrorDefinition(
                f"Message key is mandatory for error code '{code}'",
            )
        severity = Severity(self.severity)
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "severity", severity)
        object.__setattr__(
            self, "metadata", MappingProxyType(dict(self.metadata)),
        )

    def __hash__(self) -> int:
        # metadata values may be unhashable; equal errors still hash equal
        return hash((self.code, self.message, self.severity, self.must_raise))

    @classmethod
    def of(
        cls,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        must_raise: bool = False,
        **metadata: Any,
    ) -> "ValidationError":
        return cls(
            code=code, message=message, metadata=metadata,
            severity=severity, must_raise=must_raise,
        )

    def with_metadata(self, key: str, value: Any) -> "ValidationError":
        merged = dict(self.metadata)
        merged[key] = value
        return replace(self, metadata=merged)

    def with_severity(self, severity: Severity) -> "ValidationError":
        return replace(self, severity=severity)

    def localized_message(self, catalog: Mapping[str, str]) -> str:
        """Resolve message as a key in catalog, interpolating metadata.

        Positional placeholders take metadata values in insertion order, named
        ones take them by key. Missing key falls back to "Error code: <code>".
        """
        template = catalog.get(self.message)
        if template is None:
            return f"Error code: {self.code}"
        return template.format(*self.metadata.values(), **self.metadata)

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }

    def __str__(self) -> str:
        if self.metadata:
            return f"[{self.code}] {self.message} (metadata: {dict(self.metadata)})"
        return f"[{self.code}] {self.message}"
