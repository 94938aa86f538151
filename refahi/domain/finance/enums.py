"""Statuses and categories used by the finance module."""

from enum import StrEnum


class BillStatus(StrEnum):
    DRAFT = "Draft"
    ISSUED = "Issued"
    PARTIALLY_PAID = "PartiallyPaid"
    FULLY_PAID = "FullyPaid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"
    VOIDED = "Voided"
    PARTIALLY_REFUNDED = "PartiallyRefunded"
    REFUNDED = "Refunded"


class BillType(StrEnum):
    """What a bill pays for; its reference id is interpreted per type."""

    TOUR_RESERVATION = "TourReservation"
    WALLET_CHARGE = "WalletCharge"
    GENERAL = "General"


class PaymentStatus(StrEnum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class PaymentMethod(StrEnum):
    ONLINE = "Online"
    WALLET = "Wallet"


class RefundStatus(StrEnum):
    COMPLETED = "Completed"


class WalletStatus(StrEnum):
    ACTIVE = "Active"
    SUSPENDED = "Suspended"


class WalletTransactionType(StrEnum):
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    BILL_PAYMENT = "BillPayment"
    REFUND = "Refund"


# Bills that can still receive money
PAYABLE_BILL_STATUSES = frozenset(
    {BillStatus.ISSUED, BillStatus.PARTIALLY_PAID, BillStatus.OVERDUE}
)

REFUNDABLE_BILL_STATUSES = frozenset(
    {BillStatus.FULLY_PAID, BillStatus.PARTIALLY_PAID, BillStatus.PARTIALLY_REFUNDED}
)
