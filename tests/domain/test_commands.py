"""Command runner tests — validate-then-execute, registry dispatch, logging.

Tests cover:
    - Executor runs only for a valid command
    - Rejection returns Left and logs at INFO with structured extras
    - validate_model returns the model itself on success
    - ExecutorRegistry: explicit mapping, unknown type raises
"""

import logging
from dataclasses import dataclass

import pytest

from pangolin.core.errors import ExecutorNotRegistered
from pangolin.core.validation_result import ValidationResult
from pangolin.domain.commands import (
    CommandExecutor,
    ExecutorRegistry,
    run_command,
    validate_model,
)


@dataclass(frozen=True)
class Ping:
    count: int


def _validate_ping(cmd: Ping) -> ValidationResult:
    if cmd.count <= 0:
        return ValidationResult.invalid("count", "NOT_POSITIVE", "Count must be positive")
    return ValidationResult.valid()


class PingExecutor(CommandExecutor[Ping, str]):
    def __init__(self):
        self.executed: list[Ping] = []

    def validate_business_rules(self, command: Ping) -> ValidationResult:
        return _validate_ping(command)

    def execute(self, command: Ping) -> str:
        self.executed.append(command)
        return "pong" * command.count


# --- run_command --------------------------------------------------------------

def test_valid_command_executes():
    assert run_command(Ping(2), _validate_ping, lambda c: c.count * 10).right_value == 20


def test_invalid_command_never_executes():
    calls: list[Ping] = []
    outcome = run_command(Ping(0), _validate_ping, calls.append)
    assert outcome.is_left
    assert outcome.left_value.contains_error_code("NOT_POSITIVE")
    assert calls == []


def test_rejection_logged_with_extras(caplog):
    with caplog.at_level(logging.INFO, logger="pangolin.domain.commands"):
        run_command(Ping(0), _validate_ping, lambda c: c)
    record = caplog.records[-1]
    assert record.command == "Ping"
    assert record.error_code == "NOT_POSITIVE"
    assert record.error_count == 1


def test_executor_errors_propagate():
    def boom(cmd):
        raise RuntimeError("downstream failure")

    with pytest.raises(RuntimeError):
        run_command(Ping(1), _validate_ping, boom)


# --- validate_model -----------------------------------------------------------

def test_validate_model_returns_model():
    model = Ping(1)
    assert validate_model(model, _validate_ping).right_value is model


def test_validate_model_returns_errors():
    assert validate_model(Ping(-1), _validate_ping).is_left


def test_validate_model_rejects_none():
    with pytest.raises(TypeError):
        validate_model(None, _validate_ping)


# --- CommandExecutor ----------------------------------------------------------

def test_process_validates_then_executes():
    executor = PingExecutor()
    assert executor.process(Ping(1)).right_value == "pong"
    assert executor.process(Ping(0)).is_left
    assert executor.executed == [Ping(1)]


def test_process_rejects_none():
    with pytest.raises(TypeError):
        PingExecutor().process(None)


# --- ExecutorRegistry ---------------------------------------------------------

def test_registry_dispatches_by_command_type():
    registry = ExecutorRegistry().register(Ping, PingExecutor)
    assert registry.dispatch(Ping(2)).right_value == "pongpong"


def test_registry_creates_fresh_executor():
    registry = ExecutorRegistry().register(Ping, PingExecutor)
    assert registry.create(Ping) is not registry.create(Ping)


def test_unregistered_type_raises():
    with pytest.raises(ExecutorNotRegistered):
        ExecutorRegistry().dispatch(Ping(1))


def test_register_validates_arguments():
    with pytest.raises(TypeError):
        ExecutorRegistry().register("Ping", PingExecutor)
    with pytest.raises(TypeError):
        ExecutorRegistry().register(Ping, None)
