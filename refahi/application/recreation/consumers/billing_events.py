"""Reactions of reservations to what happens to their bills."""

import structlog

from refahi.application.common import UnitOfWork
from refahi.application.recreation.protocols import (
    RESERVATION_BILL_TYPE,
    ReservationRepositoryProtocol,
)
from refahi.domain.common.domain_event import DomainEvent
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.integration_events import BillCancelled, BillFullyPaid, PaymentFailed
from refahi.domain.common.value_objects import Money
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


class _ReservationBillConsumer:
    event_type: type[DomainEvent]

    def __init__(
        self, reservation_repository: ReservationRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.reservation_repository = reservation_repository
        self.uow = uow

    def _find_reservation(
        self, reference_type: str, reference_id: str, bill_id: int
    ) -> TourReservation | None:
        """The reservation a bill event refers to, or None when the event is not ours."""
        if reference_type != RESERVATION_BILL_TYPE:
            return None
        reservation = self.reservation_repository.find_by_tracking_code(reference_id)
        if reservation is None:
            logger.warning("bill_event_unknown_reservation", tracking_code=reference_id)
            return None
        if reservation.bill_id is not None and reservation.bill_id != bill_id:
            logger.warning(
                "bill_event_bill_mismatch",
                tracking_code=reference_id,
                expected_bill_id=reservation.bill_id,
                bill_id=bill_id,
            )
            return None
        return reservation


class ConfirmReservationOnBillPaid(_ReservationBillConsumer):
    event_type = BillFullyPaid

    def __call__(self, event: BillFullyPaid) -> None:
        reservation = self._find_reservation(
            event.reference_type, event.reference_id, event.bill_id
        )
        if reservation is None or reservation.status == ReservationStatus.CONFIRMED:
            return

        try:
            with self.uow:
                # The payment arrived in time even if the hold expired meanwhile
                reservation.confirm(Money(event.paid_amount), utc_now(), skip_expiry_check=True)
                self.reservation_repository.save(reservation)
                self.uow.commit()
        except BusinessRuleViolationError as exc:
            logger.warning(
                "reservation_confirmation_rejected",
                tracking_code=reservation.tracking_code,
                status=reservation.status.value,
                reason=exc.message,
            )
            return

        logger.info(
            "reservation_confirmed",
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            bill_id=event.bill_id,
        )


class CancelReservationOnBillCancelled(_ReservationBillConsumer):
    event_type = BillCancelled

    def __call__(self, event: BillCancelled) -> None:
        reservation = self._find_reservation(
            event.reference_type, event.reference_id, event.bill_id
        )
        if reservation is None:
            return

        now = utc_now()
        reason = f"Bill cancelled: {event.reason}"
        try:
            with self.uow:
                if reservation.status == ReservationStatus.ON_HOLD:
                    changed = reservation.system_cancel(reason, now)
                else:
                    changed = reservation.cancel(reason, now)
                if not changed:
                    return
                self.reservation_repository.save(reservation)
                self.uow.commit()
        except BusinessRuleViolationError as exc:
            logger.warning(
                "reservation_cancellation_rejected",
                tracking_code=reservation.tracking_code,
                status=reservation.status.value,
                reason=exc.message,
            )
            return

        logger.info(
            "reservation_cancelled_by_bill",
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            bill_id=event.bill_id,
        )


class LogReservationPaymentFailure(_ReservationBillConsumer):
    event_type = PaymentFailed

    def __call__(self, event: PaymentFailed) -> None:
        reservation = self._find_reservation(
            event.reference_type, event.reference_id, event.bill_id
        )
        if reservation is None or reservation.status != ReservationStatus.ON_HOLD:
            return
        logger.warning(
            "reservation_payment_failed",
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            payment_id=event.payment_id,
            reason=event.reason,
        )
