"""ValidationError tests — construction rules, immutability, value equality.

Tests cover:
    - Blank code / message raise MalformedErrorDefinition (never accumulated)
    - Defaults: severity ERROR, empty metadata, UTC timestamp, not fail-fast
    - Enum codes normalize to their string value
    - Equality ignores timestamp; with_* return modified copies
    - localized_message interpolation and fallback
"""

from datetime import timezone

import pytest

from pangolin.core.domain_types import ErrorCode
from pangolin.core.errors import MalformedErrorDefinition, Severity, StructuralError
from pangolin.core.validation_error import ValidationError


# --- Construction -------------------------------------------------------------

def test_defaults_assigned_at_build():
    err = ValidationError(code="INVALID_AMOUNT", message="Amount must be positive")
    assert err.severity is Severity.ERROR
    assert dict(err.metadata) == {}
    assert err.must_raise is False
    assert err.timestamp.tzinfo is timezone.utc


def test_blank_message_fails_fast():
    with pytest.raises(MalformedErrorDefinition):
        ValidationError(code="CODE", message="   ")


def test_empty_code_fails_fast():
    with pytest.raises(MalformedErrorDefinition):
        ValidationError(code="", message="Some message")


def test_malformed_definition_is_structural_value_error():
    with pytest.raises(ValueError):
        ValidationError(code="CODE", message="")
    assert issubclass(MalformedErrorDefinition, StructuralError)


def test_enum_code_normalized_to_value():
    err = ValidationError(code=ErrorCode.BALANCE_INVALID, message="m")
    assert err.code == "BALANCE_INVALID"
    assert type(err.code) is str


def test_of_collects_keyword_metadata_in_order():
    err = ValidationError.of("LIMIT", "Too big", severity=Severity.WARNING, limit=10, unit="BRL")
    assert list(err.metadata) == ["limit", "unit"]
    assert err.severity is Severity.WARNING


# --- Immutability & equality ---------------------------------------------------

def test_error_is_frozen():
    err = ValidationError(code="C", message="m")
    with pytest.raises(AttributeError):
        err.code = "OTHER"


def test_metadata_is_read_only():
    err = ValidationError.of("C", "m", key="value")
    with pytest.raises(TypeError):
        err.metadata["key"] = "changed"


def test_equality_ignores_timestamp():
    first = ValidationError(code="C", message="m")
    second = ValidationError(code="C", message="m")
    assert first == second
    assert hash(first) == hash(second)


def test_different_severity_not_equal():
    assert ValidationError(code="C", message="m") != ValidationError(
        code="C", message="m", severity=Severity.CRITICAL,
    )


def test_with_metadata_returns_copy():
    err = ValidationError(code="C", message="m")
    tagged = err.with_metadata("field", "email")
    assert dict(tagged.metadata) == {"field": "email"}
    assert dict(err.metadata) == {}


def test_with_severity_returns_copy():
    err = ValidationError(code="C", message="m")
    assert err.with_severity(Severity.INFO).severity is Severity.INFO
    assert err.severity is Severity.ERROR


def test_unhashable_metadata_still_hashable():
    err = ValidationError.of("C", "m", ids=["a", "b"])
    assert isinstance(hash(err), int)


# --- Rendering ----------------------------------------------------------------

def test_str_includes_code_and_message():
    assert str(ValidationError(code="C", message="Bad")) == "[C] Bad"


def test_str_includes_metadata_when_present():
    assert "metadata" in str(ValidationError.of("C", "Bad", limit=3))


def test_localized_message_interpolates_metadata():
    err = ValidationError.of("LIMIT", "balance.max", limit="1000")
    catalog = {"balance.max": "Balance above {limit}"}
    assert err.localized_message(catalog) == "Balance above 1000"


def test_localized_message_missing_key_falls_back_to_code():
    err = ValidationError(code="LIMIT", message="balance.max")
    assert err.localized_message({}) == "Error code: LIMIT"


def test_to_dict_is_json_safe():
    data = ValidationError.of("C", "m", severity=Severity.CRITICAL, n=1).to_dict()
    assert data["severity"] == "CRITICAL"
    assert data["metadata"] == {"n": 1}
    assert isinstance(data["timestamp"], str)
