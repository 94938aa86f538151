from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.domain.common.value_objects import ParticipantId, UserId
from refahi.domain.recreation.entities.tour_reservation import TourReservation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RemoveGuestCommand(Command):
    reservation_id: int
    participant_id: int
    user_id: int


class RemoveGuestHandler(CommandHandler[RemoveGuestCommand, TourReservation]):
    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.uow = uow

    def handle(self, command: RemoveGuestCommand) -> TourReservation:
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        with self.uow:
            reservation.remove_participant(ParticipantId(command.participant_id))
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "guest_removed",
            reservation_id=reservation.id.value,
            participant_id=command.participant_id,
        )
        return reservation
