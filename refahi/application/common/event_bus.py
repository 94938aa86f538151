"""
In-process event bus.

Handlers subscribe to a concrete event class and are called synchronously,
in subscription order, when an event of exactly that class is published.
"""

from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

import structlog

from refahi.domain.common import DomainEvent

logger = structlog.get_logger(__name__)

TEvent = TypeVar("TEvent", bound=DomainEvent, contravariant=True)


class EventHandler(Protocol[TEvent]):
    """A consumer of one event type."""

    event_type: type[DomainEvent]

    def __call__(self, event: TEvent) -> None: ...


class EventBus:
    """Dispatches domain events to subscribed handlers."""

    def __init__(self, handlers: Iterable[EventHandler] = ()) -> None:
        self._subscriptions: dict[type[DomainEvent], list[Callable[[DomainEvent], None]]] = (
            defaultdict(list)
        )
        for handler in handlers:
            self.subscribe(handler.event_type, handler)

    def subscribe(
        self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]
    ) -> None:
        self._subscriptions[event_type].append(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> list[Callable[[DomainEvent], None]]:
        return list(self._subscriptions.get(event_type, []))

    def publish(self, event: DomainEvent) -> None:
        """
        Publish a single event.

        Exceptions raised by a handler propagate to the publisher; the
        transaction that produced the event has already committed.
        """
        handlers = self._subscriptions.get(type(event), [])
        logger.debug("publishing_event", event_type=event.event_type, handlers=len(handlers))
        for handler in handlers:
            handler(event)

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)
