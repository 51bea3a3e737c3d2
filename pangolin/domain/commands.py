"""Command Runner — validate-then-execute plumbing shared by every command.

Invariants:
    - run_command calls the executor ONLY when validation is valid
    - Rejections are returned as Either.left(ValidationResult), never raised
    - validate_model returns the model itself on success
    - ExecutorRegistry mappings are explicit; unknown types raise ExecutorNotRegistered

Design Decisions:
    - Explicit dict registry over auto-discovery: every mapping visible in one place
    - Rejections logged at INFO (expected outcome), executor failures propagate
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from pangolin.core.either import Either
from pangolin.core.errors import ExecutorNotRegistered
from pangolin.core.validation_result import ValidationResult

logger = logging.getLogger(__name__)

C = TypeVar("C")
R = TypeVar("R")


def run_command(
    command: C,
    validator: Callable[[C], ValidationResult],
    executor: Callable[[C], R],
) -> Either[ValidationResult, R]:
    """Validate; short-circuit to Left on failure, else Right(executor(command))."""
    result = validator(command)
    if not result.is_valid:
        logger.info(
            f"Command {type(command).__name__} rejected: {result.all_error_codes()}",
            extra={
                "command": type(command).__name__,
                "error_code": ",".join(result.all_error_codes()),
                "error_count": result.error_count,
            },
        )
        return Either.left(result)
    return Either.right(executor(command))


def validate_model(
    model: C, validator: Callable[[C], ValidationResult],
) -> Either[ValidationResult, C]:
    if model is None:
        raise TypeError("Model cannot be None")
    result = validator(model)
    return Either.right(model) if result.is_valid else Either.left(result)


class CommandExecutor(ABC, Generic[C, R]):
    """Separates business-rule validation from execution of one command type."""

    @abstractmethod
    def validate_business_rules(self, command: C) -> ValidationResult:
        ...

    @abstractmethod
    def execute(self, command: C) -> R:
        ...

    def process(self, command: C) -> Either[ValidationResult, R]:
        if command is None:
            raise TypeError(f"{type(self).__name__} requires a command")
        return run_command(command, self.validate_business_rules, self.execute)


class ExecutorRegistry:
    """command type -> executor factory. Explicit registration only."""

    def __init__(self):
        self._factories: dict[type, Callable[[], CommandExecutor[Any, Any]]] = {}

    def register(
        self,
        command_type: type,
        factory: Callable[[], CommandExecutor[Any, Any]],
    ) -> "ExecutorRegistry":
        if not isinstance(command_type, type):
            raise TypeError("command_type must be a class")
        if not callable(factory):
            raise TypeError("factory must be callable")
        self._factories[command_type] = factory
        return self

    def create(self, command_type: type) -> CommandExecutor[Any, Any]:
        factory = self._factories.get(command_type)
        if factory is None:
            raise ExecutorNotRegistered(command_type)
        return factory()

    def dispatch(self, command: Any) -> Either[ValidationResult, Any]:
        """Create the executor registered for type(command) and process it."""
        return self.create(type(command)).process(command)
