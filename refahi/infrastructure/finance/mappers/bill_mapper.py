"""Mapper for Bill ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import (
    BillId,
    BillItemId,
    Money,
    NationalId,
    PaymentId,
    RefundId,
)
from refahi.domain.finance.entities.bill import Bill, BillItem, Payment, Refund
from refahi.domain.finance.enums import BillStatus, PaymentMethod, PaymentStatus, RefundStatus
from refahi.infrastructure.common.collections import sync_collection
from refahi.models import Bill as BillORM
from refahi.models import BillItem as BillItemORM
from refahi.models import Payment as PaymentORM
from refahi.models import Refund as RefundORM
from refahi.utils import ensure_utc_or_none


class BillMapper:
    """Mapper for Bill ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: BillORM) -> Bill:
        """Convert ORM model to domain entity."""
        return Bill(
            id=BillId(orm_model.id),
            bill_number=orm_model.bill_number,
            title=orm_model.title,
            reference_id=orm_model.reference_id,
            bill_type=orm_model.bill_type,
            user_national_code=NationalId(orm_model.user_national_code),
            user_full_name=orm_model.user_full_name,
            status=BillStatus(orm_model.status),
            total_amount=Money(orm_model.total_amount_rials),
            paid_amount=Money(orm_model.paid_amount_rials),
            description=orm_model.description,
            issue_date=ensure_utc_or_none(orm_model.issue_date),
            due_date=ensure_utc_or_none(orm_model.due_date),
            fully_paid_date=ensure_utc_or_none(orm_model.fully_paid_date),
            cancellation_reason=orm_model.cancellation_reason,
            items=[
                BillItem(
                    id=BillItemId(item.id),
                    title=item.title,
                    unit_price=Money(item.unit_price_rials),
                    quantity=item.quantity,
                    discount_percentage=item.discount_percentage,
                    description=item.description,
                )
                for item in orm_model.items
            ],
            payments=[
                Payment(
                    id=PaymentId(payment.id),
                    amount=Money(payment.amount_rials),
                    method=PaymentMethod(payment.method),
                    tracking_number=payment.tracking_number,
                    status=PaymentStatus(payment.status),
                    gateway_transaction_id=payment.gateway_transaction_id,
                    failure_reason=payment.failure_reason,
                    created_at=ensure_utc_or_none(payment.created_at),
                    completed_at=ensure_utc_or_none(payment.completed_at),
                )
                for payment in orm_model.payments
            ],
            refunds=[
                Refund(
                    id=RefundId(refund.id),
                    amount=Money(refund.amount_rials),
                    reason=refund.reason,
                    status=RefundStatus(refund.status),
                    completed_at=ensure_utc_or_none(refund.completed_at),
                )
                for refund in orm_model.refunds
            ],
            metadata=dict(orm_model.bill_metadata or {}),
            created_at=ensure_utc_or_none(orm_model.created_at),
            updated_at=ensure_utc_or_none(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Bill, orm_model: BillORM | None = None) -> BillORM:
        """Convert domain entity to ORM model, including items, payments and refunds."""
        orm_model = orm_model or BillORM(bill_number=domain_entity.bill_number)
        orm_model.title = domain_entity.title
        orm_model.reference_id = domain_entity.reference_id
        orm_model.bill_type = domain_entity.bill_type
        orm_model.user_national_code = domain_entity.user_national_code.value
        orm_model.user_full_name = domain_entity.user_full_name
        orm_model.status = domain_entity.status.value
        orm_model.total_amount_rials = domain_entity.total_amount.amount_rials
        orm_model.paid_amount_rials = domain_entity.paid_amount.amount_rials
        orm_model.description = domain_entity.description
        orm_model.issue_date = domain_entity.issue_date
        orm_model.due_date = domain_entity.due_date
        orm_model.fully_paid_date = domain_entity.fully_paid_date
        orm_model.cancellation_reason = domain_entity.cancellation_reason
        orm_model.bill_metadata = dict(domain_entity.metadata)
        orm_model.items = sync_collection(
            orm_model.items, domain_entity.items, lambda _: BillItemORM(), self._update_item
        )
        orm_model.payments = sync_collection(
            orm_model.payments,
            domain_entity.payments,
            lambda _: PaymentORM(),
            self._update_payment,
        )
        orm_model.refunds = sync_collection(
            orm_model.refunds, domain_entity.refunds, lambda _: RefundORM(), self._update_refund
        )
        return orm_model

    @staticmethod
    def _update_item(item: BillItem, orm_model: BillItemORM) -> None:
        orm_model.title = item.title
        orm_model.description = item.description
        orm_model.unit_price_rials = item.unit_price.amount_rials
        orm_model.quantity = item.quantity
        orm_model.discount_percentage = item.discount_percentage

    @staticmethod
    def _update_payment(payment: Payment, orm_model: PaymentORM) -> None:
        orm_model.amount_rials = payment.amount.amount_rials
        orm_model.method = payment.method.value
        orm_model.status = payment.status.value
        orm_model.tracking_number = payment.tracking_number
        orm_model.gateway_transaction_id = payment.gateway_transaction_id
        orm_model.failure_reason = payment.failure_reason
        orm_model.completed_at = payment.completed_at
        if payment.created_at is not None:
            orm_model.created_at = payment.created_at

    @staticmethod
    def _update_refund(refund: Refund, orm_model: RefundORM) -> None:
        orm_model.amount_rials = refund.amount.amount_rials
        orm_model.reason = refund.reason
        orm_model.status = refund.status.value
        orm_model.completed_at = refund.completed_at
