"""Utility functions for the backend."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes loaded from the database.

    SQLite drops the offset of ``DateTime(timezone=True)`` columns, so values
    come back naive even though they were written in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def ensure_utc_or_none(value: datetime | None) -> datetime | None:
    return ensure_utc(value) if value is not None else None
