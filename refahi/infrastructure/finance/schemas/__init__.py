from .finance_schemas import (
    BillDetailSchema,
    BillResponse,
    BillSummarySchema,
    CancelBillRequest,
    ChargeWalletRequest,
    CompletePaymentRequest,
    CreateBillRequest,
    FailPaymentRequest,
    PaymentResponse,
    PaymentSchema,
    PayWithWalletRequest,
    WalletSchema,
    WalletTransactionSchema,
)

__all__ = [
    "BillDetailSchema",
    "BillResponse",
    "BillSummarySchema",
    "CancelBillRequest",
    "ChargeWalletRequest",
    "CompletePaymentRequest",
    "CreateBillRequest",
    "FailPaymentRequest",
    "PayWithWalletRequest",
    "PaymentResponse",
    "PaymentSchema",
    "WalletSchema",
    "WalletTransactionSchema",
]
