from dataclasses import dataclass, field

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import FacilityRepositoryProtocol
from refahi.domain.facilities.entities.facility import Facility
from refahi.domain.facilities.enums import FacilityType
from refahi.exceptions import ConflictError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateFacilityCommand(Command):
    name: str
    code: str
    facility_type: FacilityType
    description: str | None = None
    bank_name: str | None = None
    required_features: list[str] = field(default_factory=list)
    prohibited_features: list[str] = field(default_factory=list)
    required_capabilities: list[str] = field(default_factory=list)
    prohibited_capabilities: list[str] = field(default_factory=list)


class CreateFacilityHandler(CommandHandler[CreateFacilityCommand, Facility]):
    def __init__(self, facility_repository: FacilityRepositoryProtocol, uow: UnitOfWork) -> None:
        self.facility_repository = facility_repository
        self.uow = uow

    def handle(self, command: CreateFacilityCommand) -> Facility:
        with self.uow:
            facility = Facility.create(
                name=command.name,
                code=command.code,
                facility_type=command.facility_type,
                description=command.description,
                bank_name=command.bank_name,
                required_features=command.required_features,
                prohibited_features=command.prohibited_features,
                required_capabilities=command.required_capabilities,
                prohibited_capabilities=command.prohibited_capabilities,
            )
            if self.facility_repository.code_exists(facility.code):
                raise ConflictError(f"A facility with code {facility.code} already exists")
            facility = self.facility_repository.save(facility)
            self.uow.commit()

        logger.info("facility_created", facility_id=facility.id.value, code=facility.code)
        return facility
