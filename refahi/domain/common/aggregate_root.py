"""
Base class for aggregate roots.

An aggregate root is the only object of its cluster that handlers load and
save (``TourReservation`` owns its participants and price snapshots, ``Bill``
its items, payments and refunds). Its methods enforce the cluster's rules
and record domain events for the unit of work to publish after commit.
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """Entity that guards an aggregate and records its domain events."""

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Return the recorded events and forget them."""
        events, self._events = self._events, []
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        return list(self._events)
