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
class ReactivateExpiredReservationCommand(Command):
    reservation_id: int
    user_id: int


class ReactivateExpiredReservationHandler(
    CommandHandler[ReactivateExpiredReservationCommand, TourReservation]
):
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

    def handle(self, command: ReactivateExpiredReservationCommand) -> TourReservation:
        now = utc_now()
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        if reservation.status != ReservationStatus.EXPIRED:
            raise BusinessRuleViolationError(
                "reactivate_requires_expired", "Only expired reservations can be reactivated"
            )

        tour = self.guard.load_tour(reservation.tour_id.value)
        self.guard.ensure_registration_open(tour, now)
        self.guard.ensure_seats_available(tour, reservation, now)

        new_expiry = now + timedelta(minutes=self.settings.RESERVATION_HOLD_MINUTES)
        with self.uow:
            reservation.reactivate(new_expiry, now)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "reservation_reactivated",
            reservation_id=reservation.id.value,
            expiry_date=new_expiry.isoformat(),
        )
        return reservation
