"""Create the finance bill a held reservation is paid through."""

from dataclasses import dataclass
from datetime import datetime, timedelta

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import (
    BillingGateway,
    BillLine,
    BillSummary,
    ReservationBillRequest,
    ReservationRepositoryProtocol,
)
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.config import Settings
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import UserId
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus
from refahi.exceptions import ServiceError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InitiatePaymentCommand(Command):
    reservation_id: int
    user_id: int


@dataclass(frozen=True)
class InitiatePaymentResult:
    reservation_id: int
    tracking_code: str
    bill_id: int
    bill_number: str
    total_amount: int
    payment_url: str
    expiry_date: datetime | None


class InitiatePaymentHandler(CommandHandler[InitiatePaymentCommand, InitiatePaymentResult]):
    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        billing_gateway: BillingGateway,
        uow: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.billing_gateway = billing_gateway
        self.uow = uow
        self.settings = settings

    def handle(self, command: InitiatePaymentCommand) -> InitiatePaymentResult:
        now = utc_now()
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        self._ensure_payable(reservation, now)

        if reservation.bill_id is not None:
            summary = self.billing_gateway.get_bill_summary(reservation.bill_id)
            if summary is not None:
                logger.info(
                    "reservation_bill_reused",
                    reservation_id=reservation.id.value,
                    bill_id=summary.bill_id,
                )
                return self._result(reservation, summary)

        tour = self.guard.load_tour(reservation.tour_id.value)
        summary = self.billing_gateway.create_reservation_bill(
            self._bill_request(tour, reservation)
        )

        with self.uow:
            reservation.set_bill(summary.bill_id)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "reservation_payment_initiated",
            reservation_id=reservation.id.value,
            bill_id=summary.bill_id,
            bill_number=summary.bill_number,
            total_amount=summary.total_amount,
        )
        return self._result(reservation, summary)

    def _ensure_payable(self, reservation: TourReservation, now: datetime) -> None:
        if reservation.status != ReservationStatus.ON_HOLD:
            raise BusinessRuleViolationError(
                "payment_requires_hold", "Only a reservation on hold can be paid"
            )
        if reservation.is_expired(now):
            raise BusinessRuleViolationError("hold_expired", "Reservation hold has expired")
        window = timedelta(minutes=self.settings.MINIMUM_PAYMENT_WINDOW_MINUTES)
        if reservation.remaining_hold_seconds(now) < window.total_seconds():
            raise BusinessRuleViolationError(
                "payment_window", "Not enough time is left on the hold to complete a payment"
            )
        if reservation.total_amount.is_zero:
            raise BusinessRuleViolationError(
                "payment_requires_amount", "Reservation total must be greater than zero"
            )

    def _bill_request(self, tour: Tour, reservation: TourReservation) -> ReservationBillRequest:
        lines = []
        for snapshot in reservation.price_snapshots:
            count = sum(
                1
                for p in reservation.participants
                if p.participant_type == snapshot.participant_type
            )
            if count == 0:
                continue
            lines.append(
                BillLine(
                    title=f"{tour.title} ({snapshot.participant_type})",
                    unit_price=snapshot.final_price.amount_rials,
                    quantity=count,
                )
            )
        if not lines:
            raise ServiceError("Reservation has no billable participants")

        main = reservation.main_participant
        return ReservationBillRequest(
            title=f"Tour reservation {reservation.tracking_code}",
            reference_id=reservation.tracking_code,
            user_national_code=reservation.user_national_code.value,
            user_full_name=main.full_name if main else None,
            lines=lines,
            due_date=reservation.expiry_date,
            description=tour.title,
            metadata={
                "reservation_id": str(reservation.id.value),
                "tour_id": str(tour.id.value),
            },
        )

    def _result(self, reservation: TourReservation, summary: BillSummary) -> InitiatePaymentResult:
        return InitiatePaymentResult(
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            bill_id=summary.bill_id,
            bill_number=summary.bill_number,
            total_amount=summary.total_amount,
            payment_url=self.settings.PAYMENT_URL_TEMPLATE.format(bill_id=summary.bill_id),
            expiry_date=reservation.expiry_date,
        )
