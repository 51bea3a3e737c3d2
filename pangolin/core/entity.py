"""Entity Base — strongly-typed identifiers and the entities keyed by them.

Invariants:
    - EntityId.value is never None (MissingIdentifier)
    - Two ids are equal only when they have the same concrete class and equal values
    - EntityId is immutable after construction
    - Entity.id is never None; equality and hashing are defined by each subclass
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pangolin.core.errors import MissingIdentifier

T = TypeVar("T")
ID = TypeVar("ID", bound="EntityId[Any]")


class EntityId(Generic[T]):
    """Wraps a raw identifier value."""

    __slots__ = ("_value",)

    def __init__(self, value: T):
        if value is None:
            raise MissingIdentifier(type(self).__name__)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value(self) -> T:
        return self._value

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(other) is not type(self):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self), self._value))

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class Entity(ABC, Generic[ID]):
    """Base for domain objects identified by an EntityId."""

    def __init__(self, entity_id: ID):
        if entity_id is None:
            raise MissingIdentifier(type(self).__name__)
        self._id = entity_id

    @property
    def id(self) -> ID:
        return self._id

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        ...

    @abstractmethod
    def __hash__(self) -> int:
        ...
