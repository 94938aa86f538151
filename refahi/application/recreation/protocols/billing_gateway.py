"""Port through which recreation asks finance for bills."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

# Bill type of reservation bills; the reference id is the tracking code
RESERVATION_BILL_TYPE = "TourReservation"


@dataclass(frozen=True)
class BillLine:
    title: str
    unit_price: int
    quantity: int = 1
    description: str | None = None


@dataclass(frozen=True)
class ReservationBillRequest:
    title: str
    reference_id: str
    user_national_code: str
    user_full_name: str | None
    lines: list[BillLine]
    due_date: datetime | None = None
    description: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BillSummary:
    bill_id: int
    bill_number: str
    total_amount: int
    status: str


class BillingGateway(Protocol):
    def create_reservation_bill(self, request: ReservationBillRequest) -> BillSummary:
        """Create and issue a bill; the result is committed."""
        ...

    def get_bill_summary(self, bill_id: int) -> BillSummary | None: ...
