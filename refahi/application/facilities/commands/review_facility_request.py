"""Administrator review of facility requests."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import FacilityRequestRepositoryProtocol
from refahi.domain.common.value_objects import FacilityRequestId, Money
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.exceptions import FacilityRequestNotFoundError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StartFacilityRequestReviewCommand(Command):
    request_id: int


@dataclass(frozen=True)
class ApproveFacilityRequestCommand(Command):
    request_id: int
    approved_amount_rials: int
    notes: str | None = None


@dataclass(frozen=True)
class RejectFacilityRequestCommand(Command):
    request_id: int
    reason: str


def _load(repository: FacilityRequestRepositoryProtocol, request_id: int) -> FacilityRequest:
    request = repository.find_by_id(FacilityRequestId(request_id))
    if request is None:
        raise FacilityRequestNotFoundError(request_id)
    return request


class StartFacilityRequestReviewHandler(
    CommandHandler[StartFacilityRequestReviewCommand, FacilityRequest]
):
    def __init__(
        self, request_repository: FacilityRequestRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.request_repository = request_repository
        self.uow = uow

    def handle(self, command: StartFacilityRequestReviewCommand) -> FacilityRequest:
        with self.uow:
            request = _load(self.request_repository, command.request_id)
            request.start_review()
            request = self.request_repository.save(request)
            self.uow.commit()

        logger.info("facility_request_review_started", request_id=command.request_id)
        return request


class ApproveFacilityRequestHandler(
    CommandHandler[ApproveFacilityRequestCommand, FacilityRequest]
):
    def __init__(
        self, request_repository: FacilityRequestRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.request_repository = request_repository
        self.uow = uow

    def handle(self, command: ApproveFacilityRequestCommand) -> FacilityRequest:
        with self.uow:
            request = _load(self.request_repository, command.request_id)
            request.approve(Money(command.approved_amount_rials), utc_now(), command.notes)
            request = self.request_repository.save(request)
            self.uow.commit()

        logger.info(
            "facility_request_approved",
            request_id=command.request_id,
            approved_amount=command.approved_amount_rials,
        )
        return request


class RejectFacilityRequestHandler(CommandHandler[RejectFacilityRequestCommand, FacilityRequest]):
    def __init__(
        self, request_repository: FacilityRequestRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.request_repository = request_repository
        self.uow = uow

    def handle(self, command: RejectFacilityRequestCommand) -> FacilityRequest:
        with self.uow:
            request = _load(self.request_repository, command.request_id)
            request.reject(command.reason, utc_now())
            request = self.request_repository.save(request)
            self.uow.commit()

        logger.info("facility_request_rejected", request_id=command.request_id)
        return request
