"""SQLAlchemy implementation of the unit of work."""

import structlog
from sqlalchemy.orm import Session

from refahi.application.common.event_bus import EventBus
from refahi.application.common.unit_of_work import UnitOfWork
from refahi.domain.common import AggregateRoot, DomainEvent

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work over a request-scoped session.

    Aggregates registered with ``track`` have their recorded events
    dispatched to the event bus once the session has committed. Without a
    bus the events are dropped, which is how consumers avoid cascading.
    """

    def __init__(self, db: Session, event_bus: EventBus | None = None) -> None:
        self.db = db
        self.event_bus = event_bus
        self._tracked: list[AggregateRoot] = []

    def track(self, aggregate: AggregateRoot) -> None:
        if not any(tracked is aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    def collect_events(self) -> list[DomainEvent]:
        events: list[DomainEvent] = []
        for aggregate in self._tracked:
            events.extend(aggregate.collect_events())
        self._tracked.clear()
        return events

    def commit(self) -> None:
        self.db.commit()
        events = self.collect_events()
        if self.event_bus is None or not events:
            return
        logger.debug("dispatching_events", count=len(events))
        self.event_bus.publish_all(events)

    def rollback(self) -> None:
        self.db.rollback()
        self._tracked.clear()
