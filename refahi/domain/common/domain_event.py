"""
Base class for domain events.

An event is a frozen record of something an aggregate did, named in the
past tense (``ReservationHeld``, ``BillFullyPaid``). Aggregates record events
while handling a command; the unit of work publishes them after commit.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Something that happened; subclasses add the facts consumers need."""

    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return type(self).__name__
