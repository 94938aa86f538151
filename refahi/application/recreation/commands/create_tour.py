"""Create a draft tour."""

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import TourRepositoryProtocol
from refahi.domain.recreation.entities.tour import Tour

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateTourCommand(Command):
    title: str
    tour_start: datetime
    tour_end: datetime
    description: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    max_guests_per_reservation: int = 0
    required_capabilities: list[str] = field(default_factory=list)
    required_features: list[str] = field(default_factory=list)
    required_agencies: list[int] = field(default_factory=list)
    restricted_tour_ids: list[int] = field(default_factory=list)


class CreateTourHandler(CommandHandler[CreateTourCommand, Tour]):
    def __init__(self, tour_repository: TourRepositoryProtocol, uow: UnitOfWork) -> None:
        self.tour_repository = tour_repository
        self.uow = uow

    def handle(self, command: CreateTourCommand) -> Tour:
        with self.uow:
            tour = Tour.create(
                title=command.title,
                tour_start=command.tour_start,
                tour_end=command.tour_end,
                description=command.description,
                min_age=command.min_age,
                max_age=command.max_age,
                max_guests_per_reservation=command.max_guests_per_reservation,
                required_capabilities=command.required_capabilities,
                required_features=command.required_features,
                required_agencies=command.required_agencies,
                restricted_tour_ids=command.restricted_tour_ids,
            )
            tour = self.tour_repository.save(tour)
            self.uow.commit()

        logger.info("tour_created", tour_id=tour.id.value, title=tour.title)
        return tour
