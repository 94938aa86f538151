"""Tests for the Bill aggregate."""

from datetime import UTC, datetime

import pytest

from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.integration_events import BillCancelled, BillFullyPaid, PaymentFailed
from refahi.domain.common.value_objects import BillId, Money, NationalId, PaymentId
from refahi.domain.finance.entities.bill import Bill, generate_bill_number
from refahi.domain.finance.enums import BillStatus, PaymentMethod, PaymentStatus

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def _bill(issue: bool = True) -> Bill:
    bill = Bill.create(
        title="Tour reservation RSV-1",
        reference_id="12",
        bill_type="TourReservation",
        user_national_code=NationalId("1234567891"),
        now=NOW,
    )
    bill.id = BillId(5)
    bill.add_item("Adult seat", Money(300_000), quantity=2)
    bill.add_item("Insurance", Money(100_000), discount_percentage=50)
    if issue:
        bill.issue(NOW)
    return bill


def _pay(bill: Bill, amount: int, payment_id: int) -> None:
    payment = bill.create_payment(Money(amount), PaymentMethod.ONLINE, NOW)
    payment.id = PaymentId(payment_id)
    bill.record_payment(payment.id, f"GW-{payment_id}", NOW)


def test_bill_number_format() -> None:
    assert generate_bill_number(NOW).startswith("BL-20250301090000")


class TestItems:
    def test_total_is_sum_of_line_totals(self) -> None:
        bill = _bill(issue=False)
        assert bill.total_amount == Money(650_000)
        assert bill.status == BillStatus.DRAFT

    def test_items_only_in_draft(self) -> None:
        bill = _bill()
        with pytest.raises(BusinessRuleViolationError):
            bill.add_item("Late fee", Money(1_000))

    def test_invalid_quantity(self) -> None:
        bill = _bill(issue=False)
        with pytest.raises(ValidationError):
            bill.add_item("Nothing", Money(1_000), quantity=0)

    def test_issue_requires_items(self) -> None:
        bill = Bill.create(
            title="Empty",
            reference_id="1",
            bill_type="Manual",
            user_national_code=NationalId("1234567891"),
            now=NOW,
        )
        with pytest.raises(BusinessRuleViolationError):
            bill.issue(NOW)

    def test_title_required(self) -> None:
        with pytest.raises(ValidationError):
            Bill.create(
                title="  ",
                reference_id="1",
                bill_type="Manual",
                user_national_code=NationalId("1234567891"),
                now=NOW,
            )


class TestPayments:
    def test_full_payment(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)

        assert bill.status == BillStatus.FULLY_PAID
        assert bill.fully_paid_date == NOW
        assert bill.remaining_amount == Money.zero()
        event = bill.collect_events()[0]
        assert isinstance(event, BillFullyPaid)
        assert event.bill_id == 5
        assert event.reference_type == "TourReservation"
        assert event.reference_id == "12"
        assert event.paid_amount == 650_000
        assert event.user_national_code == "1234567891"

    def test_partial_payments(self) -> None:
        bill = _bill()
        _pay(bill, 400_000, 1)

        assert bill.status == BillStatus.PARTIALLY_PAID
        assert bill.remaining_amount == Money(250_000)
        assert bill.collect_events() == []

        _pay(bill, 250_000, 2)
        assert bill.status == BillStatus.FULLY_PAID

    def test_draft_bill_is_not_payable(self) -> None:
        with pytest.raises(BusinessRuleViolationError):
            _bill(issue=False).create_payment(Money(1), PaymentMethod.ONLINE, NOW)

    def test_amount_limits(self) -> None:
        bill = _bill()
        with pytest.raises(ValidationError):
            bill.create_payment(Money.zero(), PaymentMethod.ONLINE, NOW)
        with pytest.raises(ValidationError):
            bill.create_payment(Money(650_001), PaymentMethod.ONLINE, NOW)

    def test_fully_paid_bill_rejects_payments(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)
        with pytest.raises(BusinessRuleViolationError, match="already fully paid"):
            bill.create_payment(Money(1), PaymentMethod.ONLINE, NOW)

    def test_failed_payment(self) -> None:
        bill = _bill()
        payment = bill.create_payment(Money(650_000), PaymentMethod.ONLINE, NOW)
        payment.id = PaymentId(3)

        bill.fail_payment(payment.id, "Declined")

        assert payment.status == PaymentStatus.FAILED
        assert bill.status == BillStatus.ISSUED
        event = bill.collect_events()[0]
        assert isinstance(event, PaymentFailed)
        assert event.reason == "Declined"
        with pytest.raises(BusinessRuleViolationError):
            bill.record_payment(payment.id, "GW-3", NOW)


class TestCancel:
    def test_cancel_cancels_pending_payments(self) -> None:
        bill = _bill()
        payment = bill.create_payment(Money(650_000), PaymentMethod.ONLINE, NOW)

        assert bill.cancel("Reservation expired") is True

        assert bill.status == BillStatus.CANCELLED
        assert payment.status == PaymentStatus.CANCELLED
        assert isinstance(bill.collect_events()[0], BillCancelled)
        assert bill.cancel("Again") is False
        with pytest.raises(BusinessRuleViolationError, match="cancelled bill"):
            bill.create_payment(Money(1), PaymentMethod.ONLINE, NOW)

    def test_paid_bill_cannot_be_cancelled(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)
        with pytest.raises(BusinessRuleViolationError):
            bill.cancel(None)


class TestRefund:
    def test_full_refund(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)

        bill.refund(Money(650_000), "Reservation cancelled", NOW)

        assert bill.status == BillStatus.REFUNDED
        assert bill.paid_amount == Money.zero()
        assert bill.refunded_amount == Money(650_000)

    def test_partial_refund(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)

        bill.refund(Money(150_000), "Partial", NOW)

        assert bill.status == BillStatus.PARTIALLY_REFUNDED
        assert bill.paid_amount == Money(500_000)

    def test_refunded_amount_cannot_be_paid_again(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)
        bill.refund(Money(150_000), "Partial", NOW)
        bill.collect_events()

        with pytest.raises(BusinessRuleViolationError):
            bill.create_payment(Money(150_000), PaymentMethod.ONLINE, NOW)
        assert bill.collect_events() == []

    def test_further_refunds_after_partial_refund(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)
        bill.refund(Money(150_000), "Partial", NOW)

        bill.refund(Money(500_000), "Rest", NOW)

        assert bill.status == BillStatus.REFUNDED
        assert bill.refunded_amount == Money(650_000)

    def test_partially_refunded_bill_cannot_be_cancelled(self) -> None:
        bill = _bill()
        _pay(bill, 650_000, 1)
        bill.refund(Money(150_000), "Partial", NOW)

        with pytest.raises(BusinessRuleViolationError):
            bill.cancel("Too late")

    def test_refund_limits(self) -> None:
        bill = _bill()
        with pytest.raises(BusinessRuleViolationError):
            bill.refund(Money(1), "Unpaid", NOW)
        _pay(bill, 650_000, 1)
        with pytest.raises(ValidationError):
            bill.refund(Money(650_001), "Too much", NOW)
