"""Repository for Wallet aggregates."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import NationalId, WalletId
from refahi.domain.finance.entities.wallet import Wallet, WalletTransaction
from refahi.exceptions import NotFoundError
from refahi.infrastructure.finance.mappers.wallet_mapper import WalletMapper
from refahi.models import Wallet as WalletORM
from refahi.models import WalletTransaction as WalletTransactionORM

logger = logging.getLogger(__name__)


class WalletRepository:
    """Repository for Wallet aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = WalletMapper()

    def find_by_id(self, wallet_id: WalletId) -> Wallet | None:
        orm_model = self.db.get(WalletORM, wallet_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_national_code(self, national_code: NationalId) -> Wallet | None:
        stmt = select(WalletORM).where(WalletORM.user_national_code == national_code.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_transactions(
        self, wallet_id: WalletId, pagination: Pagination
    ) -> tuple[list[WalletTransaction], int]:
        stmt = select(WalletTransactionORM).where(
            WalletTransactionORM.wallet_id == wallet_id.value
        )
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.order_by(WalletTransactionORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        transactions = [
            self.mapper.transaction_to_domain(row) for row in self.db.execute(stmt).scalars()
        ]
        return transactions, total

    def save(self, wallet: Wallet) -> Wallet:
        if wallet.id.value == 0:
            orm_model = self.mapper.to_orm(wallet)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(WalletORM, wallet.id.value)
            if orm_model is None:
                raise NotFoundError(f"Wallet with id {wallet.id.value} not found")
            self.mapper.to_orm(wallet, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved wallet {orm_model.id}")
        return self.mapper.to_domain(orm_model)
