from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import TourCapacityId, UserId
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChangeReservationCapacityCommand(Command):
    reservation_id: int
    capacity_id: int
    user_id: int


class ChangeReservationCapacityHandler(
    CommandHandler[ChangeReservationCapacityCommand, TourReservation]
):
    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.uow = uow

    def handle(self, command: ChangeReservationCapacityCommand) -> TourReservation:
        now = utc_now()
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        tour = self.guard.load_tour(reservation.tour_id.value)

        capacity = tour.get_capacity(TourCapacityId(command.capacity_id))
        if capacity is None:
            raise BusinessRuleViolationError(
                "capacity_belongs_to_tour", "Selected capacity does not belong to this tour"
            )
        if not capacity.is_registration_open(now):
            raise BusinessRuleViolationError(
                "capacity_open", "Registration for the selected capacity is not open"
            )

        with self.uow:
            reservation.change_capacity(capacity.id)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "reservation_capacity_changed",
            reservation_id=reservation.id.value,
            capacity_id=command.capacity_id,
        )
        return reservation
