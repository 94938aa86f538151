from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import FacilityRequestRepositoryProtocol
from refahi.domain.common.value_objects import FacilityRequestId
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.exceptions import FacilityRequestNotFoundError, ForbiddenError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CancelFacilityRequestCommand(Command):
    request_id: int
    national_code: str
    reason: str | None = None


class CancelFacilityRequestHandler(CommandHandler[CancelFacilityRequestCommand, FacilityRequest]):
    """Cancel a pending or in-review request on behalf of its owner."""

    def __init__(
        self, request_repository: FacilityRequestRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.request_repository = request_repository
        self.uow = uow

    def handle(self, command: CancelFacilityRequestCommand) -> FacilityRequest:
        with self.uow:
            request = self.request_repository.find_by_id(FacilityRequestId(command.request_id))
            if request is None:
                raise FacilityRequestNotFoundError(command.request_id)
            if request.national_code.value != command.national_code:
                raise ForbiddenError("You can only cancel your own requests")
            request.cancel(utc_now(), command.reason)
            request = self.request_repository.save(request)
            self.uow.commit()

        logger.info("facility_request_cancelled", request_id=command.request_id)
        return request
