from .billing_gateway import (
    RESERVATION_BILL_TYPE,
    BillingGateway,
    BillLine,
    BillSummary,
    ReservationBillRequest,
)
from .reservation_repository import ReservationRepositoryProtocol
from .tour_repository import TourRepositoryProtocol

__all__ = [
    "RESERVATION_BILL_TYPE",
    "BillLine",
    "BillSummary",
    "BillingGateway",
    "ReservationBillRequest",
    "ReservationRepositoryProtocol",
    "TourRepositoryProtocol",
]
