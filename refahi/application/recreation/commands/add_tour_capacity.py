from dataclasses import dataclass
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import TourRepositoryProtocol
from refahi.domain.common.value_objects import TourId
from refahi.domain.recreation.entities.tour import (
    DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION,
    Tour,
)
from refahi.exceptions import TourNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AddTourCapacityCommand(Command):
    tour_id: int
    max_participants: int
    registration_start: datetime
    registration_end: datetime
    description: str | None = None
    min_participants_per_reservation: int = 1
    max_participants_per_reservation: int = DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION
    is_active: bool = True


class AddTourCapacityHandler(CommandHandler[AddTourCapacityCommand, Tour]):
    def __init__(self, tour_repository: TourRepositoryProtocol, uow: UnitOfWork) -> None:
        self.tour_repository = tour_repository
        self.uow = uow

    def handle(self, command: AddTourCapacityCommand) -> Tour:
        with self.uow:
            tour = self.tour_repository.find_by_id(TourId(command.tour_id))
            if tour is None:
                raise TourNotFoundError(command.tour_id)

            tour.add_capacity(
                max_participants=command.max_participants,
                registration_start=command.registration_start,
                registration_end=command.registration_end,
                description=command.description,
                min_participants_per_reservation=command.min_participants_per_reservation,
                max_participants_per_reservation=command.max_participants_per_reservation,
                is_active=command.is_active,
            )
            tour = self.tour_repository.save(tour)
            self.uow.commit()

        logger.info(
            "tour_capacity_added",
            tour_id=tour.id.value,
            max_participants=command.max_participants,
        )
        return tour
