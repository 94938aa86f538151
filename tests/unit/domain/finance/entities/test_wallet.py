"""Tests for the Wallet aggregate."""

from datetime import UTC, datetime

import pytest

from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import Money, NationalId
from refahi.domain.finance.entities.wallet import Wallet
from refahi.domain.finance.enums import WalletTransactionType

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def wallet() -> Wallet:
    return Wallet.open(NationalId("1234567891"), NOW)


def test_new_wallet_is_empty(wallet: Wallet) -> None:
    assert wallet.balance == Money.zero()
    assert wallet.transactions == []


def test_balance_follows_ledger(wallet: Wallet) -> None:
    wallet.deposit(Money(1_000_000), NOW, reference_id="PAY-1")
    tx = wallet.pay_bill(Money(650_000), "BL-1", NOW)

    assert wallet.balance == Money(350_000)
    assert tx.transaction_type == WalletTransactionType.BILL_PAYMENT
    assert tx.reference_id == "BL-1"
    assert tx.balance_after == Money(350_000)
    assert not tx.is_credit

    refund = wallet.receive_refund(Money(650_000), "BL-1", "Reservation cancelled", NOW)
    assert refund.is_credit
    assert wallet.balance == Money(1_000_000)


def test_insufficient_balance(wallet: Wallet) -> None:
    wallet.deposit(Money(100), NOW)

    with pytest.raises(BusinessRuleViolationError, match="Insufficient wallet balance: 100 < 101"):
        wallet.withdraw(Money(101), NOW)

    assert wallet.balance == Money(100)
    assert len(wallet.transactions) == 1


def test_zero_amount(wallet: Wallet) -> None:
    with pytest.raises(ValidationError):
        wallet.deposit(Money.zero(), NOW)


def test_suspended_wallet(wallet: Wallet) -> None:
    wallet.suspend()
    with pytest.raises(BusinessRuleViolationError, match="not active"):
        wallet.deposit(Money(100), NOW)

    wallet.activate()
    wallet.deposit(Money(100), NOW)
    assert wallet.balance == Money(100)
