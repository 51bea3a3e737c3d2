"""Either — disjoint union carrying a failure (Left) or a success (Right).

Invariants:
    - An Either is exactly one of Left(value) or Right(value); never both, never neither
    - Payloads are never None (TypeError)
    - fold invokes exactly one branch, synchronously
    - Instances are immutable

Design Decisions:
    - Tagged variants as two frozen dataclasses under a shared base: `match` works
      on Left(value) / Right(value), and isinstance is the tag
    - Either itself cannot be instantiated; build through Either.left / Either.right
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from pangolin.core.errors import EitherAccessError

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


class Either(Generic[L, R]):
    """Base of Left and Right. Use the left / right factories."""

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any):
        if cls is Either:
            raise TypeError("Either cannot be instantiated; use Either.left or Either.right")
        return super().__new__(cls)

    @staticmethod
    def left(value: L) -> "Either[L, Any]":
        return Left(value)

    @staticmethod
    def right(value: R) -> "Either[Any, R]":
        return Right(value)

    @property
    def is_left(self) -> bool:
        return isinstance(self, Left)

    @property
    def is_right(self) -> bool:
        return isinstance(self, Right)

    @property
    def left_value(self) -> L:
        if not isinstance(self, Left):
            raise EitherAccessError("left")
        return self.value

    @property
    def right_value(self) -> R:
        if not isinstance(self, Right):
            raise EitherAccessError("right")
        return self.value

    def fold(self, on_left: Callable[[L], T], on_right: Callable[[R], T]) -> T:
        if on_left is None or on_right is None:
            raise TypeError("fold requires both a left and a right function")
        if isinstance(self, Left):
            return on_left(self.value)
        return on_right(self.value)

    def map(self, fn: Callable[[R], T]) -> "Either[L, T]":
        if isinstance(self, Right):
            return Right(fn(self.value))
        return self

    def map_left(self, fn: Callable[[L], T]) -> "Either[T, R]":
        if isinstance(self, Left):
            return Left(fn(self.value))
        return self

    def bind(self, fn: Callable[[R], "Either[L, T]"]) -> "Either[L, T]":
        """Chain a step that itself returns an Either; Left short-circuits."""
        if isinstance(self, Left):
            return self
        chained = fn(self.value)
        if not isinstance(chained, Either):
            raise TypeError(
                f"bind function must return an Either, got {type(chained).__name__}",
            )
        return chained

    def get_or_else(self, default: R) -> R:
        return self.value if isinstance(self, Right) else default


@dataclass(frozen=True)
class Left(Either[L, Any]):
    value: L

    def __post_init__(self):
        if self.value is None:
            raise TypeError("Left value cannot be None")


@dataclass(frozen=True)
class Right(Either[Any, R]):
    value: R

    def __post_init__(self):
        if self.value is None:
            raise TypeError("Right value cannot be None")


left = Either.left
right = Either.right
