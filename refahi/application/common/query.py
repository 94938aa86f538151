"""Read-only use cases: a frozen query and the handler that answers it."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Query:
    """Filter and paging parameters of a read."""


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Answers one query type without touching the unit of work."""

    @abstractmethod
    def handle(self, query: TQuery) -> TResult:
        raise NotImplementedError
