"""Repository for Bill aggregates."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import BillId, NationalId, PaymentId
from refahi.domain.finance.entities.bill import Bill
from refahi.domain.finance.enums import BillStatus
from refahi.exceptions import BillNotFoundError
from refahi.infrastructure.finance.mappers.bill_mapper import BillMapper
from refahi.models import Bill as BillORM
from refahi.models import Payment as PaymentORM

logger = logging.getLogger(__name__)


class BillRepository:
    """Repository for Bill aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BillMapper()

    def find_by_id(self, bill_id: BillId) -> Bill | None:
        orm_model = self.db.get(BillORM, bill_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_payment_id(self, payment_id: PaymentId) -> Bill | None:
        payment = self.db.get(PaymentORM, payment_id.value)
        return self.mapper.to_domain(payment.bill) if payment else None

    def find_by_reference(self, bill_type: str, reference_id: str) -> list[Bill]:
        stmt = (
            select(BillORM)
            .where(BillORM.bill_type == bill_type, BillORM.reference_id == reference_id)
            .order_by(BillORM.id)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def find_by_user(
        self,
        national_code: NationalId,
        pagination: Pagination,
        status: BillStatus | None = None,
    ) -> tuple[list[Bill], int]:
        """Bills of a user, newest first."""
        stmt = select(BillORM).where(BillORM.user_national_code == national_code.value)
        if status is not None:
            stmt = stmt.where(BillORM.status == status.value)
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.options(
                selectinload(BillORM.items),
                selectinload(BillORM.payments),
                selectinload(BillORM.refunds),
            )
            .order_by(BillORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        bills = [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]
        return bills, total

    def save(self, bill: Bill) -> Bill:
        if bill.id.value == 0:
            orm_model = self.mapper.to_orm(bill)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(BillORM, bill.id.value)
            if orm_model is None:
                raise BillNotFoundError(bill.id.value)
            self.mapper.to_orm(bill, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved bill {orm_model.id}")
        return self.mapper.to_domain(orm_model)
