"""Pydantic schemas for bill, payment and wallet API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from refahi.domain.finance.entities.bill import MAX_TITLE_LENGTH, Bill, BillItem, Payment, Refund
from refahi.domain.finance.entities.wallet import Wallet, WalletTransaction
from refahi.domain.finance.enums import (
    BillStatus,
    BillType,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
    WalletStatus,
    WalletTransactionType,
)
from refahi.infrastructure.common.schemas import SuccessResponse

# Requests


class BillItemRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    unit_price_rials: int = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    discount_percentage: float = Field(0.0, ge=0, le=100)
    description: str | None = Field(None, max_length=500)


class CreateBillRequest(BaseModel):
    """Request schema for an administrator-created bill."""

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    reference_id: str = Field(..., min_length=1, max_length=100)
    bill_type: BillType = BillType.GENERAL
    user_national_code: str = Field(..., min_length=8, max_length=10)
    user_full_name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=1000)
    due_date: datetime | None = None
    items: list[BillItemRequest] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    issue_immediately: bool = False


class CancelBillRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class CompletePaymentRequest(BaseModel):
    gateway_transaction_id: str = Field(..., min_length=1, max_length=100)


class FailPaymentRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class ChargeWalletRequest(BaseModel):
    amount_rials: int = Field(..., gt=0)


class PayWithWalletRequest(BaseModel):
    bill_id: int


# Bills


class BillItemSchema(BaseModel):
    id: int
    title: str
    unit_price_rials: int
    quantity: int
    discount_percentage: float
    line_total_rials: int
    description: str | None

    @classmethod
    def from_domain(cls, item: BillItem) -> "BillItemSchema":
        return cls(
            id=item.id.value,
            title=item.title,
            unit_price_rials=item.unit_price.amount_rials,
            quantity=item.quantity,
            discount_percentage=item.discount_percentage,
            line_total_rials=item.line_total.amount_rials,
            description=item.description,
        )


class PaymentSchema(BaseModel):
    id: int
    amount_rials: int
    method: PaymentMethod
    tracking_number: str
    status: PaymentStatus
    gateway_transaction_id: str | None
    failure_reason: str | None
    created_at: datetime | None
    completed_at: datetime | None

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentSchema":
        return cls(
            id=payment.id.value,
            amount_rials=payment.amount.amount_rials,
            method=payment.method,
            tracking_number=payment.tracking_number,
            status=payment.status,
            gateway_transaction_id=payment.gateway_transaction_id,
            failure_reason=payment.failure_reason,
            created_at=payment.created_at,
            completed_at=payment.completed_at,
        )


class RefundSchema(BaseModel):
    id: int
    amount_rials: int
    reason: str
    status: RefundStatus
    completed_at: datetime | None

    @classmethod
    def from_domain(cls, refund: Refund) -> "RefundSchema":
        return cls(
            id=refund.id.value,
            amount_rials=refund.amount.amount_rials,
            reason=refund.reason,
            status=refund.status,
            completed_at=refund.completed_at,
        )


class BillSummarySchema(BaseModel):
    id: int
    bill_number: str
    title: str
    bill_type: str
    reference_id: str
    status: BillStatus
    total_amount_rials: int
    paid_amount_rials: int
    remaining_amount_rials: int
    issue_date: datetime | None
    due_date: datetime | None

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillSummarySchema":
        return cls(
            id=bill.id.value,
            bill_number=bill.bill_number,
            title=bill.title,
            bill_type=bill.bill_type,
            reference_id=bill.reference_id,
            status=bill.status,
            total_amount_rials=bill.total_amount.amount_rials,
            paid_amount_rials=bill.paid_amount.amount_rials,
            remaining_amount_rials=bill.remaining_amount.amount_rials,
            issue_date=bill.issue_date,
            due_date=bill.due_date,
        )


class BillDetailSchema(BillSummarySchema):
    user_national_code: str
    user_full_name: str | None
    description: str | None
    fully_paid_date: datetime | None
    cancellation_reason: str | None
    refunded_amount_rials: int
    items: list[BillItemSchema]
    payments: list[PaymentSchema]
    refunds: list[RefundSchema]
    metadata: dict[str, str]

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillDetailSchema":
        summary = BillSummarySchema.from_domain(bill)
        return cls(
            **summary.model_dump(),
            user_national_code=bill.user_national_code.value,
            user_full_name=bill.user_full_name,
            description=bill.description,
            fully_paid_date=bill.fully_paid_date,
            cancellation_reason=bill.cancellation_reason,
            refunded_amount_rials=bill.refunded_amount.amount_rials,
            items=[BillItemSchema.from_domain(i) for i in bill.items],
            payments=[PaymentSchema.from_domain(p) for p in bill.payments],
            refunds=[RefundSchema.from_domain(r) for r in bill.refunds],
            metadata=dict(bill.metadata),
        )


class BillResponse(SuccessResponse):
    bill: BillDetailSchema


class PaymentResponse(SuccessResponse):
    bill_id: int
    bill_status: BillStatus
    payment: PaymentSchema


# Wallets


class WalletTransactionSchema(BaseModel):
    id: int
    transaction_type: WalletTransactionType
    amount_rials: int
    balance_after_rials: int
    is_credit: bool
    reference_id: str | None
    description: str | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, transaction: WalletTransaction) -> "WalletTransactionSchema":
        return cls(
            id=transaction.id.value,
            transaction_type=transaction.transaction_type,
            amount_rials=transaction.amount.amount_rials,
            balance_after_rials=transaction.balance_after.amount_rials,
            is_credit=transaction.is_credit,
            reference_id=transaction.reference_id,
            description=transaction.description,
            created_at=transaction.created_at,
        )


class WalletSchema(BaseModel):
    id: int
    user_national_code: str
    status: WalletStatus
    balance_rials: int
    created_at: datetime | None

    @classmethod
    def from_domain(cls, wallet: Wallet) -> "WalletSchema":
        return cls(
            id=wallet.id.value,
            user_national_code=wallet.user_national_code.value,
            status=wallet.status,
            balance_rials=wallet.balance.amount_rials,
            created_at=wallet.created_at,
        )
