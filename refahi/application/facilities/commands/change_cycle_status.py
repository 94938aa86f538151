"""Activate or close a facility cycle."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import FacilityCycleRepositoryProtocol
from refahi.domain.common.value_objects import FacilityCycleId
from refahi.domain.facilities.entities.facility_cycle import FacilityCycle
from refahi.exceptions import FacilityCycleNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActivateFacilityCycleCommand(Command):
    cycle_id: int


@dataclass(frozen=True)
class CloseFacilityCycleCommand(Command):
    cycle_id: int


class _CycleStatusHandler:
    def __init__(self, cycle_repository: FacilityCycleRepositoryProtocol, uow: UnitOfWork) -> None:
        self.cycle_repository = cycle_repository
        self.uow = uow

    def _load(self, cycle_id: int) -> FacilityCycle:
        cycle = self.cycle_repository.find_by_id(FacilityCycleId(cycle_id))
        if cycle is None:
            raise FacilityCycleNotFoundError(cycle_id)
        return cycle


class ActivateFacilityCycleHandler(
    _CycleStatusHandler, CommandHandler[ActivateFacilityCycleCommand, FacilityCycle]
):
    def handle(self, command: ActivateFacilityCycleCommand) -> FacilityCycle:
        with self.uow:
            cycle = self._load(command.cycle_id)
            cycle.activate()
            cycle = self.cycle_repository.save(cycle)
            self.uow.commit()

        logger.info("facility_cycle_activated", cycle_id=cycle.id.value)
        return cycle


class CloseFacilityCycleHandler(
    _CycleStatusHandler, CommandHandler[CloseFacilityCycleCommand, FacilityCycle]
):
    def handle(self, command: CloseFacilityCycleCommand) -> FacilityCycle:
        with self.uow:
            cycle = self._load(command.cycle_id)
            cycle.close()
            cycle = self.cycle_repository.save(cycle)
            self.uow.commit()

        logger.info("facility_cycle_closed", cycle_id=cycle.id.value)
        return cycle
