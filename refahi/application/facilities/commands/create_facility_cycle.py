from dataclasses import dataclass
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import (
    FacilityCycleRepositoryProtocol,
    FacilityRepositoryProtocol,
)
from refahi.domain.common.value_objects import FacilityId, Money
from refahi.domain.facilities.entities.facility_cycle import FacilityCycle
from refahi.exceptions import FacilityNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateFacilityCycleCommand(Command):
    facility_id: int
    name: str
    start_date: datetime
    end_date: datetime
    quota: int
    min_amount_rials: int
    max_amount_rials: int
    payment_months: int = 12
    interest_rate: float = 0.0
    description: str | None = None
    approval_message: str | None = None


class CreateFacilityCycleHandler(CommandHandler[CreateFacilityCycleCommand, FacilityCycle]):
    def __init__(
        self,
        facility_repository: FacilityRepositoryProtocol,
        cycle_repository: FacilityCycleRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.facility_repository = facility_repository
        self.cycle_repository = cycle_repository
        self.uow = uow

    def handle(self, command: CreateFacilityCycleCommand) -> FacilityCycle:
        with self.uow:
            facility = self.facility_repository.find_by_id(FacilityId(command.facility_id))
            if facility is None:
                raise FacilityNotFoundError(command.facility_id)
            cycle = FacilityCycle.create(
                facility_id=facility.id,
                name=command.name,
                start_date=command.start_date,
                end_date=command.end_date,
                quota=command.quota,
                min_amount=Money(command.min_amount_rials),
                max_amount=Money(command.max_amount_rials),
                payment_months=command.payment_months,
                interest_rate=command.interest_rate,
                description=command.description,
                approval_message=command.approval_message,
            )
            cycle = self.cycle_repository.save(cycle)
            self.uow.commit()

        logger.info(
            "facility_cycle_created",
            facility_id=command.facility_id,
            cycle_id=cycle.id.value,
            quota=cycle.quota,
        )
        return cycle
