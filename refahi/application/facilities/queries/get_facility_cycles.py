from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler
from refahi.application.facilities.dtos import CycleQuota
from refahi.application.facilities.protocols import (
    FacilityCycleRepositoryProtocol,
    FacilityRepositoryProtocol,
    FacilityRequestRepositoryProtocol,
)
from refahi.domain.common.value_objects import FacilityId
from refahi.domain.facilities.enums import FacilityCycleStatus
from refahi.exceptions import FacilityNotFoundError


@dataclass(frozen=True)
class GetFacilityCyclesQuery(Query):
    facility_id: int
    status: FacilityCycleStatus | None = None


class GetFacilityCyclesHandler(QueryHandler[GetFacilityCyclesQuery, list[CycleQuota]]):
    """Cycles of a facility with their used and remaining quota."""

    def __init__(
        self,
        facility_repository: FacilityRepositoryProtocol,
        cycle_repository: FacilityCycleRepositoryProtocol,
        request_repository: FacilityRequestRepositoryProtocol,
    ) -> None:
        self.facility_repository = facility_repository
        self.cycle_repository = cycle_repository
        self.request_repository = request_repository

    def handle(self, query: GetFacilityCyclesQuery) -> list[CycleQuota]:
        facility_id = FacilityId(query.facility_id)
        if self.facility_repository.find_by_id(facility_id) is None:
            raise FacilityNotFoundError(query.facility_id)

        cycles = self.cycle_repository.find_by_facility(facility_id, status=query.status)
        usages = self.request_repository.get_quota_usages([c.id.value for c in cycles])
        return [CycleQuota(cycle=c, used_quota=usages.get(c.id.value, 0)) for c in cycles]
