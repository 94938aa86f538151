from .finance_events import (
    CancelBillOnReservationExpired,
    DepositWalletChargeOnBillPaid,
    RefundCancelledReservation,
)

__all__ = [
    "CancelBillOnReservationExpired",
    "DepositWalletChargeOnBillPaid",
    "RefundCancelledReservation",
]
