from dataclasses import dataclass
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import TourRepositoryProtocol
from refahi.domain.common.value_objects import Money, TourId
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.enums import ParticipantType
from refahi.exceptions import TourNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AddTourPricingCommand(Command):
    tour_id: int
    participant_type: ParticipantType
    price_rials: int
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_default: bool = False
    discount_percentage: float = 0.0
    description: str | None = None


class AddTourPricingHandler(CommandHandler[AddTourPricingCommand, Tour]):
    def __init__(self, tour_repository: TourRepositoryProtocol, uow: UnitOfWork) -> None:
        self.tour_repository = tour_repository
        self.uow = uow

    def handle(self, command: AddTourPricingCommand) -> Tour:
        with self.uow:
            tour = self.tour_repository.find_by_id(TourId(command.tour_id))
            if tour is None:
                raise TourNotFoundError(command.tour_id)

            tour.add_pricing(
                participant_type=command.participant_type,
                price=Money(command.price_rials),
                valid_from=command.valid_from,
                valid_to=command.valid_to,
                is_default=command.is_default,
                discount_percentage=command.discount_percentage,
                description=command.description,
            )
            tour = self.tour_repository.save(tour)
            self.uow.commit()

        logger.info(
            "tour_pricing_added",
            tour_id=tour.id.value,
            participant_type=command.participant_type.value,
            price_rials=command.price_rials,
        )
        return tour
