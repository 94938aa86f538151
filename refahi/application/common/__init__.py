"""
Application common module.

Contains base classes for application layer:
- Command: Base class for write operations
- Query: Base class for read operations
- CommandHandler: Handles command execution
- QueryHandler: Handles query execution
- UnitOfWork: Transaction boundary that dispatches domain events
- EventBus: In-process delivery of domain events to consumers
"""

from .command import Command, CommandHandler
from .event_bus import EventBus, EventHandler
from .pagination import PaginatedResult, Pagination
from .query import Query, QueryHandler
from .unit_of_work import UnitOfWork

__all__ = [
    "Command",
    "CommandHandler",
    "EventBus",
    "EventHandler",
    "PaginatedResult",
    "Pagination",
    "Query",
    "QueryHandler",
    "UnitOfWork",
]
