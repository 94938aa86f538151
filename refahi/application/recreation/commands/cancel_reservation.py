from dataclasses import dataclass
from datetime import timedelta

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.config import Settings
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import UserId
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CancelReservationCommand(Command):
    reservation_id: int
    user_id: int
    reason: str | None = None


class CancelReservationHandler(CommandHandler[CancelReservationCommand, TourReservation]):
    """
    Cancel a reservation on behalf of its owner.

    Cancelling a paid reservation publishes ReservationCancelled with the
    paid amount, which finance refunds into the owner's wallet.
    """

    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        uow: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.uow = uow
        self.settings = settings

    def handle(self, command: CancelReservationCommand) -> TourReservation:
        now = utc_now()
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        tour = self.guard.load_tour(reservation.tour_id.value)

        if now >= tour.tour_start:
            raise BusinessRuleViolationError(
                "tour_started", "Reservations cannot be cancelled after the tour has started"
            )
        deadline = tour.tour_start - timedelta(hours=self.settings.CANCELLATION_DEADLINE_HOURS)
        if now > deadline:
            raise BusinessRuleViolationError(
                "cancellation_deadline",
                f"Reservations can only be cancelled until "
                f"{self.settings.CANCELLATION_DEADLINE_HOURS} hours before the tour starts",
            )
        if reservation.status in (ReservationStatus.CANCELLED, ReservationStatus.SYSTEM_CANCELLED):
            raise BusinessRuleViolationError(
                "already_cancelled", "Reservation is already cancelled"
            )

        previous_status = reservation.status
        with self.uow:
            reservation.cancel(command.reason, now)
            self.uow.track(reservation)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "reservation_cancelled",
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            previous_status=previous_status.value,
        )
        return reservation
