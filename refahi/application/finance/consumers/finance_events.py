"""Reactions of bills and wallets to events from finance and recreation."""

import structlog

from refahi.application.common import UnitOfWork
from refahi.application.finance.access import get_or_open_wallet
from refahi.application.finance.protocols import BillRepositoryProtocol, WalletRepositoryProtocol
from refahi.domain.common.integration_events import (
    BillFullyPaid,
    ReservationCancelled,
    ReservationExpired,
)
from refahi.domain.common.value_objects import BillId, Money, NationalId, WalletId
from refahi.domain.finance.enums import BillStatus, BillType
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


class DepositWalletChargeOnBillPaid:
    event_type = BillFullyPaid

    def __init__(self, wallet_repository: WalletRepositoryProtocol, uow: UnitOfWork) -> None:
        self.wallet_repository = wallet_repository
        self.uow = uow

    def __call__(self, event: BillFullyPaid) -> None:
        if event.reference_type != BillType.WALLET_CHARGE:
            return
        wallet = self.wallet_repository.find_by_id(WalletId(int(event.reference_id)))
        if wallet is None:
            logger.warning("wallet_charge_unknown_wallet", reference_id=event.reference_id)
            return

        with self.uow:
            wallet.deposit(
                Money(event.paid_amount),
                utc_now(),
                reference_id=event.bill_number,
                description="Wallet charge",
            )
            self.wallet_repository.save(wallet)
            self.uow.commit()

        logger.info(
            "wallet_charged",
            wallet_id=wallet.id.value,
            bill_id=event.bill_id,
            amount=event.paid_amount,
        )


class RefundCancelledReservation:
    """Refund what was paid for a cancelled reservation into the owner's wallet."""

    event_type = ReservationCancelled

    def __init__(
        self,
        bill_repository: BillRepositoryProtocol,
        wallet_repository: WalletRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.bill_repository = bill_repository
        self.wallet_repository = wallet_repository
        self.uow = uow

    def __call__(self, event: ReservationCancelled) -> None:
        if event.paid_amount <= 0 or event.bill_id is None:
            return
        bill = self.bill_repository.find_by_id(BillId(event.bill_id))
        if bill is None:
            logger.warning("refund_unknown_bill", bill_id=event.bill_id)
            return
        if bill.paid_amount.is_zero:
            return

        now = utc_now()
        amount = Money(min(event.paid_amount, bill.paid_amount.amount_rials))
        reason = f"Reservation {event.tracking_code} cancelled: {event.reason}"
        with self.uow:
            bill.refund(amount, reason, now)
            self.bill_repository.save(bill)
            wallet = get_or_open_wallet(
                self.wallet_repository, NationalId(event.user_national_code)
            )
            wallet.receive_refund(amount, bill.bill_number, reason, now)
            self.wallet_repository.save(wallet)
            self.uow.commit()

        logger.info(
            "reservation_refunded",
            reservation_id=event.reservation_id,
            bill_id=event.bill_id,
            amount=amount.amount_rials,
        )


class CancelBillOnReservationExpired:
    event_type = ReservationExpired

    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def __call__(self, event: ReservationExpired) -> None:
        if event.bill_id is None:
            return
        bill = self.bill_repository.find_by_id(BillId(event.bill_id))
        if bill is None or bill.status in (
            BillStatus.FULLY_PAID,
            BillStatus.CANCELLED,
            BillStatus.PARTIALLY_REFUNDED,
            BillStatus.REFUNDED,
        ):
            return

        with self.uow:
            bill.cancel(f"Reservation {event.tracking_code} expired")
            self.bill_repository.save(bill)
            self.uow.commit()

        logger.info(
            "expired_reservation_bill_cancelled",
            reservation_id=event.reservation_id,
            bill_id=event.bill_id,
        )
