"""
Base classes for entities and their ids.

An entity keeps its identity while its state changes: two ``Participant``
objects with the same ``ParticipantId`` are the same participant. Ids are
assigned by the database, so a newly created entity carries id 0 until its
repository saves it.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Strongly typed integer id.

    ``TourId(3)`` and ``BillId(3)`` never compare equal, which keeps ids of
    different aggregates from being mixed up in handler code.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{type(self).__name__} must be non-negative")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Placeholder id for an entity that has not been saved yet."""
        return cls(0)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """Domain object identified by its ``id`` rather than its attributes."""

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"
