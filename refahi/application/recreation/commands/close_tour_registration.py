from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import TourRepositoryProtocol
from refahi.domain.common.value_objects import TourId
from refahi.domain.recreation.entities.tour import Tour
from refahi.exceptions import TourNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CloseTourRegistrationCommand(Command):
    tour_id: int


class CloseTourRegistrationHandler(CommandHandler[CloseTourRegistrationCommand, Tour]):
    def __init__(self, tour_repository: TourRepositoryProtocol, uow: UnitOfWork) -> None:
        self.tour_repository = tour_repository
        self.uow = uow

    def handle(self, command: CloseTourRegistrationCommand) -> Tour:
        with self.uow:
            tour = self.tour_repository.find_by_id(TourId(command.tour_id))
            if tour is None:
                raise TourNotFoundError(command.tour_id)

            tour.close_registration()
            tour = self.tour_repository.save(tour)
            self.uow.commit()

        logger.info("tour_registration_closed", tour_id=tour.id.value)
        return tour
