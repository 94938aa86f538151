"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from refahi.application.common.pagination import PaginatedResult

T = TypeVar("T")


class SuccessResponse(BaseModel):
    """Outcome of a command; endpoint responses extend it with their payload."""

    success: bool = True
    message: str


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic pagination wrapper."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_result(cls, result: PaginatedResult, items: list[T]) -> "PaginatedResponse[T]":
        return cls(
            items=items,
            total=result.total,
            page=result.pagination.page,
            page_size=result.pagination.page_size,
            total_pages=result.total_pages,
        )
