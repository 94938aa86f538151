from .billing_events import (
    CancelReservationOnBillCancelled,
    ConfirmReservationOnBillPaid,
    LogReservationPaymentFailure,
)

__all__ = [
    "CancelReservationOnBillCancelled",
    "ConfirmReservationOnBillPaid",
    "LogReservationPaymentFailure",
]
