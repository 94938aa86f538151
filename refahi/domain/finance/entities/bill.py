"""Bill aggregate with its items, payments and refunds."""

import random
from dataclasses import dataclass, field
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.entity import Entity
from refahi.domain.common.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)
from refahi.domain.common.integration_events import BillCancelled, BillFullyPaid, PaymentFailed
from refahi.domain.common.value_objects import (
    BillId,
    BillItemId,
    Money,
    NationalId,
    PaymentId,
    RefundId,
)
from refahi.domain.finance.enums import (
    PAYABLE_BILL_STATUSES,
    REFUNDABLE_BILL_STATUSES,
    BillStatus,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
)

MAX_TITLE_LENGTH = 200


def generate_bill_number(now: datetime, rng: random.Random | None = None) -> str:
    return f"BL-{now:%Y%m%d%H%M%S}{(rng or random).randint(100, 999)}"


def generate_payment_tracking_number(now: datetime, rng: random.Random | None = None) -> str:
    return f"PAY-{now:%Y%m%d%H%M%S}{(rng or random).randint(1000, 9999)}"


@dataclass
class BillItem(Entity[BillItemId]):
    """One line of a bill."""

    id: BillItemId
    title: str
    unit_price: Money
    quantity: int = 1
    discount_percentage: float = 0.0
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Item title cannot be empty", field="title")
        if self.quantity <= 0:
            raise ValidationError("Quantity must be greater than zero", field="quantity")
        if not 0 <= self.discount_percentage <= 100:
            raise ValidationError(
                "Discount percentage must be between 0 and 100", field="discount_percentage"
            )

    @property
    def line_total(self) -> Money:
        return self.unit_price.multiply(self.quantity).apply_discount(self.discount_percentage)


@dataclass
class Payment(Entity[PaymentId]):
    """An attempt to pay (part of) a bill."""

    id: PaymentId
    amount: Money
    method: PaymentMethod
    tracking_number: str
    status: PaymentStatus = PaymentStatus.PENDING
    gateway_transaction_id: str | None = None
    failure_reason: str | None = None
    created_at: datetime | None = None
    completed_at: datetime | None = None

    def complete(self, gateway_transaction_id: str, now: datetime) -> None:
        if self.status != PaymentStatus.PENDING:
            raise BusinessRuleViolationError(
                "payment_pending", f"Payment in status {self.status} cannot be completed"
            )
        if not gateway_transaction_id or not gateway_transaction_id.strip():
            raise ValidationError(
                "Gateway transaction id is required", field="gateway_transaction_id"
            )
        self.status = PaymentStatus.COMPLETED
        self.gateway_transaction_id = gateway_transaction_id
        self.completed_at = now

    def fail(self, reason: str | None) -> None:
        if self.status != PaymentStatus.PENDING:
            raise BusinessRuleViolationError(
                "payment_pending", f"Payment in status {self.status} cannot fail"
            )
        self.status = PaymentStatus.FAILED
        self.failure_reason = reason

    def cancel(self) -> None:
        if self.status == PaymentStatus.PENDING:
            self.status = PaymentStatus.CANCELLED


@dataclass
class Refund(Entity[RefundId]):
    """Money given back from a paid bill."""

    id: RefundId
    amount: Money
    reason: str
    status: RefundStatus = RefundStatus.COMPLETED
    completed_at: datetime | None = None


@dataclass
class Bill(AggregateRoot[BillId]):
    """
    A bill issued to a user.

    Business Rules:
    - Items can only be added to a draft bill; the total is the sum of item totals
    - A bill needs at least one item to be issued
    - Payments are only taken on issued or partially paid bills, up to the remaining amount
    - A fully paid bill cannot be cancelled
    - Refunds never exceed what was paid
    """

    id: BillId
    bill_number: str
    title: str
    reference_id: str
    bill_type: str
    user_national_code: NationalId
    user_full_name: str | None = None
    status: BillStatus = BillStatus.DRAFT
    total_amount: Money = field(default_factory=Money.zero)
    paid_amount: Money = field(default_factory=Money.zero)
    description: str | None = None
    issue_date: datetime | None = None
    due_date: datetime | None = None
    fully_paid_date: datetime | None = None
    cancellation_reason: str | None = None
    items: list[BillItem] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    refunds: list[Refund] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Bill title cannot be empty", field="title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Bill title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        if not self.reference_id:
            raise ValidationError("Reference id cannot be empty", field="reference_id")

    @property
    def remaining_amount(self) -> Money:
        if self.paid_amount >= self.total_amount:
            return Money.zero()
        return self.total_amount - self.paid_amount

    @property
    def refunded_amount(self) -> Money:
        total = Money.zero()
        for refund in self.refunds:
            if refund.status == RefundStatus.COMPLETED:
                total = total + refund.amount
        return total

    def is_overdue(self, now: datetime) -> bool:
        return (
            self.due_date is not None
            and now > self.due_date
            and self.status in (BillStatus.ISSUED, BillStatus.PARTIALLY_PAID, BillStatus.OVERDUE)
        )

    def get_payment(self, payment_id: PaymentId) -> Payment:
        payment = next((p for p in self.payments if p.id == payment_id), None)
        if payment is None:
            raise EntityNotFoundError("Payment", payment_id.value)
        return payment

    def add_item(
        self,
        title: str,
        unit_price: Money,
        quantity: int = 1,
        discount_percentage: float = 0.0,
        description: str | None = None,
    ) -> BillItem:
        if self.status != BillStatus.DRAFT:
            raise BusinessRuleViolationError(
                "items_only_in_draft", "Items can only be added to a draft bill"
            )
        item = BillItem(
            id=BillItemId.generate(),
            title=title.strip(),
            unit_price=unit_price,
            quantity=quantity,
            discount_percentage=discount_percentage,
            description=description,
        )
        self.items.append(item)
        self._recalculate_total()
        return item

    def _recalculate_total(self) -> None:
        total = Money.zero()
        for item in self.items:
            total = total + item.line_total
        self.total_amount = total

    def issue(self, now: datetime) -> None:
        if self.status != BillStatus.DRAFT:
            raise BusinessRuleViolationError(
                "issue_requires_draft", f"Bill in status {self.status} cannot be issued"
            )
        if not self.items:
            raise BusinessRuleViolationError("issue_requires_items", "Bill has no items")
        self.status = BillStatus.ISSUED
        self.issue_date = now

    def create_payment(self, amount: Money, method: PaymentMethod, now: datetime) -> Payment:
        if self.status == BillStatus.CANCELLED:
            raise BusinessRuleViolationError(
                "payment_on_cancelled_bill", "Cannot create payment for cancelled bill"
            )
        if self.status == BillStatus.FULLY_PAID:
            raise BusinessRuleViolationError("bill_fully_paid", "Bill is already fully paid")
        if self.status not in PAYABLE_BILL_STATUSES:
            raise BusinessRuleViolationError(
                "bill_not_payable", f"Bill in status {self.status} cannot be paid"
            )
        if amount.is_zero:
            raise ValidationError("Payment amount must be greater than zero", field="amount")
        if amount > self.remaining_amount:
            raise ValidationError(
                "Payment amount exceeds remaining bill amount",
                field="amount",
                value=amount.amount_rials,
            )
        payment = Payment(
            id=PaymentId.generate(),
            amount=amount,
            method=method,
            tracking_number=generate_payment_tracking_number(now),
            created_at=now,
        )
        self.payments.append(payment)
        return payment

    def record_payment(
        self, payment_id: PaymentId, gateway_transaction_id: str, now: datetime
    ) -> Payment:
        """
        Record a successful payment and update the bill status.

        Records BillFullyPaid when the paid amount reaches the total.
        """
        if self.status not in PAYABLE_BILL_STATUSES:
            raise BusinessRuleViolationError(
                "bill_not_payable", f"Bill in status {self.status} cannot receive payments"
            )
        payment = self.get_payment(payment_id)
        payment.complete(gateway_transaction_id, now)
        self.paid_amount = self.paid_amount + payment.amount
        self._update_status(now)
        return payment

    def _update_status(self, now: datetime) -> None:
        if self.paid_amount.is_zero:
            self.status = BillStatus.ISSUED
        elif self.paid_amount >= self.total_amount:
            self.status = BillStatus.FULLY_PAID
            self.fully_paid_date = now
            self._record_event(
                BillFullyPaid(
                    bill_id=self.id.value,
                    bill_number=self.bill_number,
                    reference_type=self.bill_type,
                    reference_id=self.reference_id,
                    paid_amount=self.paid_amount.amount_rials,
                    user_national_code=self.user_national_code.value,
                )
            )
        else:
            self.status = BillStatus.PARTIALLY_PAID

    def fail_payment(self, payment_id: PaymentId, reason: str | None) -> Payment:
        payment = self.get_payment(payment_id)
        payment.fail(reason)
        self._record_event(
            PaymentFailed(
                payment_id=payment_id.value,
                bill_id=self.id.value,
                reference_type=self.bill_type,
                reference_id=self.reference_id,
                reason=reason or "Payment failed",
            )
        )
        return payment

    def cancel(self, reason: str | None) -> bool:
        """
        Cancel the bill and its pending payments.

        Returns:
            False if the bill was already cancelled
        """
        if self.status == BillStatus.FULLY_PAID:
            raise BusinessRuleViolationError(
                "cancel_paid_bill", "A fully paid bill cannot be cancelled"
            )
        if self.status == BillStatus.CANCELLED:
            return False
        if self.status in (BillStatus.REFUNDED, BillStatus.PARTIALLY_REFUNDED):
            raise BusinessRuleViolationError(
                "cancel_refunded_bill", "A refunded bill cannot be cancelled"
            )
        for payment in self.payments:
            payment.cancel()
        self.status = BillStatus.CANCELLED
        self.cancellation_reason = reason
        self._record_event(
            BillCancelled(
                bill_id=self.id.value,
                reference_type=self.bill_type,
                reference_id=self.reference_id,
                reason=reason or "Cancelled",
            )
        )
        return True

    def refund(self, amount: Money, reason: str, now: datetime) -> Refund:
        """
        Give back ``amount`` of what was paid; the refund completes immediately.

        A bill with refunds no longer accepts payments, so refunded money
        cannot be paid in again.
        """
        if self.status not in REFUNDABLE_BILL_STATUSES:
            raise BusinessRuleViolationError("refund_requires_paid", "Can only refund paid bills")
        if amount.is_zero:
            raise ValidationError("Refund amount must be greater than zero", field="amount")
        if amount > self.paid_amount:
            raise ValidationError("Refund amount exceeds paid amount", field="amount")
        refund = Refund(id=RefundId.generate(), amount=amount, reason=reason, completed_at=now)
        self.refunds.append(refund)
        self.paid_amount = self.paid_amount - amount
        if self.paid_amount.is_zero:
            self.status = BillStatus.REFUNDED
        else:
            self.status = BillStatus.PARTIALLY_REFUNDED
        return refund

    @classmethod
    def create(
        cls,
        title: str,
        reference_id: str,
        bill_type: str,
        user_national_code: NationalId,
        now: datetime,
        user_full_name: str | None = None,
        description: str | None = None,
        due_date: datetime | None = None,
        metadata: dict[str, str] | None = None,
    ) -> "Bill":
        """Create a new draft bill (ID will be 0 until persisted)."""
        return cls(
            id=BillId.generate(),
            bill_number=generate_bill_number(now),
            title=title.strip(),
            reference_id=reference_id,
            bill_type=bill_type,
            user_national_code=user_national_code,
            user_full_name=user_full_name,
            description=description,
            due_date=due_date,
            metadata=dict(metadata or {}),
            created_at=now,
        )
