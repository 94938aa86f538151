"""Wallet aggregate keeping a ledger of balance changes."""

from dataclasses import dataclass, field
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.entity import Entity
from refahi.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvariantViolationError,
    ValidationError,
)
from refahi.domain.common.value_objects import Money, NationalId, WalletId, WalletTransactionId
from refahi.domain.finance.enums import WalletStatus, WalletTransactionType

_CREDIT_TYPES = frozenset({WalletTransactionType.DEPOSIT, WalletTransactionType.REFUND})


@dataclass
class WalletTransaction(Entity[WalletTransactionId]):
    """One balance change; ``balance_after`` is the balance once it was applied."""

    id: WalletTransactionId
    transaction_type: WalletTransactionType
    amount: Money
    balance_after: Money
    reference_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None

    @property
    def is_credit(self) -> bool:
        return self.transaction_type in _CREDIT_TYPES


@dataclass
class Wallet(AggregateRoot[WalletId]):
    """
    A member's stored-value wallet.

    Business Rules:
    - One wallet per national code (enforced at repository level)
    - The balance is the balance after the latest transaction and never negative
    - Only an active wallet accepts transactions
    - Transaction amounts are greater than zero
    """

    id: WalletId
    user_national_code: NationalId
    status: WalletStatus = WalletStatus.ACTIVE
    transactions: list[WalletTransaction] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def balance(self) -> Money:
        if not self.transactions:
            return Money.zero()
        return self.transactions[-1].balance_after

    def _ensure_usable(self, amount: Money) -> None:
        if self.status != WalletStatus.ACTIVE:
            raise BusinessRuleViolationError("wallet_active", "Wallet is not active")
        if amount.is_zero:
            raise ValidationError("Amount must be greater than zero", field="amount")

    def _credit(
        self,
        transaction_type: WalletTransactionType,
        amount: Money,
        reference_id: str | None,
        description: str | None,
        now: datetime,
    ) -> WalletTransaction:
        self._ensure_usable(amount)
        return self._append(
            transaction_type, amount, self.balance + amount, reference_id, description, now
        )

    def _debit(
        self,
        transaction_type: WalletTransactionType,
        amount: Money,
        reference_id: str | None,
        description: str | None,
        now: datetime,
    ) -> WalletTransaction:
        self._ensure_usable(amount)
        if amount > self.balance:
            raise BusinessRuleViolationError(
                "sufficient_balance",
                f"Insufficient wallet balance: {self.balance.amount_rials} < {amount.amount_rials}",
            )
        return self._append(
            transaction_type, amount, self.balance - amount, reference_id, description, now
        )

    def _append(
        self,
        transaction_type: WalletTransactionType,
        amount: Money,
        balance_after: Money,
        reference_id: str | None,
        description: str | None,
        now: datetime,
    ) -> WalletTransaction:
        if balance_after.amount_rials < 0:
            raise InvariantViolationError("Wallet", "balance cannot be negative")
        transaction = WalletTransaction(
            id=WalletTransactionId.generate(),
            transaction_type=transaction_type,
            amount=amount,
            balance_after=balance_after,
            reference_id=reference_id,
            description=description,
            created_at=now,
        )
        self.transactions.append(transaction)
        return transaction

    def deposit(
        self,
        amount: Money,
        now: datetime,
        reference_id: str | None = None,
        description: str | None = None,
    ) -> WalletTransaction:
        return self._credit(WalletTransactionType.DEPOSIT, amount, reference_id, description, now)

    def withdraw(
        self,
        amount: Money,
        now: datetime,
        reference_id: str | None = None,
        description: str | None = None,
    ) -> WalletTransaction:
        return self._debit(WalletTransactionType.WITHDRAWAL, amount, reference_id, description, now)

    def pay_bill(self, amount: Money, bill_number: str, now: datetime) -> WalletTransaction:
        return self._debit(
            WalletTransactionType.BILL_PAYMENT,
            amount,
            bill_number,
            f"Payment of bill {bill_number}",
            now,
        )

    def receive_refund(
        self, amount: Money, reference_id: str, reason: str, now: datetime
    ) -> WalletTransaction:
        return self._credit(WalletTransactionType.REFUND, amount, reference_id, reason, now)

    def suspend(self) -> None:
        self.status = WalletStatus.SUSPENDED

    def activate(self) -> None:
        self.status = WalletStatus.ACTIVE

    @classmethod
    def open(cls, user_national_code: NationalId, now: datetime) -> "Wallet":
        """Create an empty wallet (ID will be 0 until persisted)."""
        return cls(id=WalletId.generate(), user_national_code=user_national_code, created_at=now)
