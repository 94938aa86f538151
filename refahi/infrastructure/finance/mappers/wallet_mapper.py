"""Mapper for Wallet ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import Money, NationalId, WalletId, WalletTransactionId
from refahi.domain.finance.entities.wallet import Wallet, WalletTransaction
from refahi.domain.finance.enums import WalletStatus, WalletTransactionType
from refahi.models import Wallet as WalletORM
from refahi.models import WalletTransaction as WalletTransactionORM
from refahi.utils import ensure_utc_or_none


class WalletMapper:
    """Mapper for Wallet ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: WalletORM) -> Wallet:
        return Wallet(
            id=WalletId(orm_model.id),
            user_national_code=NationalId(orm_model.user_national_code),
            status=WalletStatus(orm_model.status),
            transactions=[self.transaction_to_domain(t) for t in orm_model.transactions],
            created_at=ensure_utc_or_none(orm_model.created_at),
        )

    def transaction_to_domain(self, orm_model: WalletTransactionORM) -> WalletTransaction:
        return WalletTransaction(
            id=WalletTransactionId(orm_model.id),
            transaction_type=WalletTransactionType(orm_model.transaction_type),
            amount=Money(orm_model.amount_rials),
            balance_after=Money(orm_model.balance_after_rials),
            reference_id=orm_model.reference_id,
            description=orm_model.description,
            created_at=ensure_utc_or_none(orm_model.created_at),
        )

    def to_orm(self, domain_entity: Wallet, orm_model: WalletORM | None = None) -> WalletORM:
        """Convert domain entity to ORM model; transactions are append-only."""
        orm_model = orm_model or WalletORM(
            user_national_code=domain_entity.user_national_code.value
        )
        orm_model.status = domain_entity.status.value
        if domain_entity.created_at is not None and orm_model.id is None:
            orm_model.created_at = domain_entity.created_at
        for transaction in domain_entity.transactions:
            if transaction.id.value:
                continue
            orm_model.transactions.append(
                WalletTransactionORM(
                    transaction_type=transaction.transaction_type.value,
                    amount_rials=transaction.amount.amount_rials,
                    balance_after_rials=transaction.balance_after.amount_rials,
                    reference_id=transaction.reference_id,
                    description=transaction.description,
                    created_at=transaction.created_at,
                )
            )
        return orm_model
