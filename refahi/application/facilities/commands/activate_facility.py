from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import FacilityRepositoryProtocol
from refahi.domain.common.value_objects import FacilityId
from refahi.domain.facilities.entities.facility import Facility
from refahi.exceptions import FacilityNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActivateFacilityCommand(Command):
    facility_id: int


class ActivateFacilityHandler(CommandHandler[ActivateFacilityCommand, Facility]):
    def __init__(self, facility_repository: FacilityRepositoryProtocol, uow: UnitOfWork) -> None:
        self.facility_repository = facility_repository
        self.uow = uow

    def handle(self, command: ActivateFacilityCommand) -> Facility:
        with self.uow:
            facility = self.facility_repository.find_by_id(FacilityId(command.facility_id))
            if facility is None:
                raise FacilityNotFoundError(command.facility_id)
            facility.activate()
            facility = self.facility_repository.save(facility)
            self.uow.commit()

        logger.info("facility_activated", facility_id=facility.id.value)
        return facility
