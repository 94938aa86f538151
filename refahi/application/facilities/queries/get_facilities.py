from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.facilities.protocols import FacilityRepositoryProtocol
from refahi.domain.facilities.entities.facility import Facility
from refahi.domain.facilities.enums import FacilityStatus


@dataclass(frozen=True)
class GetFacilitiesQuery(Query):
    pagination: Pagination = field(default_factory=Pagination)
    status: FacilityStatus | None = None


class GetFacilitiesHandler(QueryHandler[GetFacilitiesQuery, PaginatedResult[Facility]]):
    def __init__(self, facility_repository: FacilityRepositoryProtocol) -> None:
        self.facility_repository = facility_repository

    def handle(self, query: GetFacilitiesQuery) -> PaginatedResult[Facility]:
        items, total = self.facility_repository.find_all(query.pagination, status=query.status)
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
