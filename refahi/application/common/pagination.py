"""
Page parameters and paged results for list queries.

Routers build ``Pagination`` from the ``page`` / ``page_size`` query
parameters; repositories apply ``offset`` and ``limit`` and return the page
together with the unpaged row count, which handlers wrap in
``PaginatedResult``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """1-indexed page request."""

    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of ``items`` out of ``total`` matching rows."""

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.pagination.page_size)
