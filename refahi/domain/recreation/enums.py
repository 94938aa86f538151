"""Statuses and categories used by the recreation module."""

from enum import StrEnum


class TourStatus(StrEnum):
    DRAFT = "Draft"
    SCHEDULED = "Scheduled"
    REGISTRATION_OPEN = "RegistrationOpen"
    REGISTRATION_CLOSED = "RegistrationClosed"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    POSTPONED = "Postponed"
    SUSPENDED = "Suspended"
    CANCELLED = "Cancelled"
    ARCHIVED = "Archived"


class ReservationStatus(StrEnum):
    DRAFT = "Draft"
    ON_HOLD = "OnHold"
    PAYING = "Paying"
    CONFIRMED = "Confirmed"
    PAYMENT_FAILED = "PaymentFailed"
    CANCELLED = "Cancelled"
    SYSTEM_CANCELLED = "SystemCancelled"
    EXPIRED = "Expired"
    REFUNDING = "Refunding"
    REFUNDED = "Refunded"


class ParticipantType(StrEnum):
    MEMBER = "Member"
    GUEST = "Guest"


# Statuses that hold seats; an OnHold reservation only counts until it expires
SEAT_HOLDING_STATUSES = frozenset(
    {ReservationStatus.ON_HOLD, ReservationStatus.PAYING, ReservationStatus.CONFIRMED}
)
