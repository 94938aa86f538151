"""
Events shared between modules.

Recreation and finance never import each other's aggregates. They react to
these events instead, which are published by the unit of work after the
transaction that recorded them commits.
"""

from dataclasses import dataclass
from datetime import datetime

from .domain_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ReservationHeld(DomainEvent):
    reservation_id: int
    tracking_code: str
    expiry_date: datetime
    total_amount: int


@dataclass(frozen=True, kw_only=True)
class ReservationConfirmed(DomainEvent):
    reservation_id: int
    tracking_code: str
    bill_id: int | None


@dataclass(frozen=True, kw_only=True)
class ReservationCancelled(DomainEvent):
    """A reservation was cancelled by its owner or by the system."""

    reservation_id: int
    tracking_code: str
    bill_id: int | None
    previous_status: str
    paid_amount: int
    reason: str
    user_national_code: str


@dataclass(frozen=True, kw_only=True)
class ReservationExpired(DomainEvent):
    reservation_id: int
    tracking_code: str
    bill_id: int | None


@dataclass(frozen=True, kw_only=True)
class BillFullyPaid(DomainEvent):
    """
    The paid amount of a bill reached its total.

    ``reference_type`` is the bill type and ``reference_id`` the identifier of
    the thing being paid for, such as a reservation tracking code.
    """

    bill_id: int
    bill_number: str
    reference_type: str
    reference_id: str
    paid_amount: int
    user_national_code: str


@dataclass(frozen=True, kw_only=True)
class BillCancelled(DomainEvent):
    bill_id: int
    reference_type: str
    reference_id: str
    reason: str


@dataclass(frozen=True, kw_only=True)
class PaymentFailed(DomainEvent):
    payment_id: int
    bill_id: int
    reference_type: str
    reference_id: str
    reason: str
