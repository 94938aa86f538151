"""
Unit of work port.

Handlers open the unit of work as a context manager, save aggregates through
their repositories, ``track`` the aggregates whose events must be published
and call ``commit`` explicitly. Leaving the block with an exception rolls
the transaction back.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from refahi.domain.common import AggregateRoot


class UnitOfWork(ABC):
    """Transaction boundary of a command handler."""

    @abstractmethod
    def commit(self) -> None:
        """Commit, then publish the events recorded by tracked aggregates."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def track(self, aggregate: AggregateRoot) -> None:
        """Register an aggregate whose recorded events are published on commit."""
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()
