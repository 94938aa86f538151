from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.facilities.protocols import FacilityRequestRepositoryProtocol
from refahi.domain.common.value_objects import FacilityRequestId, NationalId
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.domain.facilities.enums import FacilityRequestStatus
from refahi.exceptions import FacilityRequestNotFoundError, ForbiddenError


@dataclass(frozen=True)
class GetFacilityRequestDetailQuery(Query):
    request_id: int
    national_code: str
    is_admin: bool = False


@dataclass(frozen=True)
class GetMyFacilityRequestsQuery(Query):
    national_code: str
    pagination: Pagination = field(default_factory=Pagination)
    status: FacilityRequestStatus | None = None


class GetFacilityRequestDetailHandler(
    QueryHandler[GetFacilityRequestDetailQuery, FacilityRequest]
):
    def __init__(self, request_repository: FacilityRequestRepositoryProtocol) -> None:
        self.request_repository = request_repository

    def handle(self, query: GetFacilityRequestDetailQuery) -> FacilityRequest:
        request = self.request_repository.find_by_id(FacilityRequestId(query.request_id))
        if request is None:
            raise FacilityRequestNotFoundError(query.request_id)
        if not query.is_admin and request.national_code.value != query.national_code:
            raise ForbiddenError("You do not have access to this facility request")
        return request


class GetMyFacilityRequestsHandler(
    QueryHandler[GetMyFacilityRequestsQuery, PaginatedResult[FacilityRequest]]
):
    def __init__(self, request_repository: FacilityRequestRepositoryProtocol) -> None:
        self.request_repository = request_repository

    def handle(self, query: GetMyFacilityRequestsQuery) -> PaginatedResult[FacilityRequest]:
        items, total = self.request_repository.find_by_national_code(
            NationalId(query.national_code), query.pagination, status=query.status
        )
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
