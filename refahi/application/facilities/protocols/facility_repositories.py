from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import (
    FacilityCycleId,
    FacilityId,
    FacilityRequestId,
    MemberId,
    NationalId,
)
from refahi.domain.facilities.entities.facility import Facility
from refahi.domain.facilities.entities.facility_cycle import FacilityCycle
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.domain.facilities.enums import (
    FacilityCycleStatus,
    FacilityRequestStatus,
    FacilityStatus,
)


class FacilityRepositoryProtocol(Protocol):
    def find_by_id(self, facility_id: FacilityId) -> Facility | None: ...

    def code_exists(self, code: str) -> bool: ...

    def find_all(
        self, pagination: Pagination, status: FacilityStatus | None = None
    ) -> tuple[list[Facility], int]: ...

    def save(self, facility: Facility) -> Facility: ...


class FacilityCycleRepositoryProtocol(Protocol):
    def find_by_id(self, cycle_id: FacilityCycleId) -> FacilityCycle | None: ...

    def find_by_facility(
        self, facility_id: FacilityId, status: FacilityCycleStatus | None = None
    ) -> list[FacilityCycle]: ...

    def save(self, cycle: FacilityCycle) -> FacilityCycle: ...


class FacilityRequestRepositoryProtocol(Protocol):
    def find_by_id(self, request_id: FacilityRequestId) -> FacilityRequest | None: ...

    def find_by_idempotency_key(
        self, key: str, member_id: MemberId
    ) -> FacilityRequest | None: ...

    def find_last_for_member(
        self, cycle_id: FacilityCycleId, member_id: MemberId
    ) -> FacilityRequest | None: ...

    def count_quota_usage(self, cycle_id: FacilityCycleId) -> int:
        """Requests of the cycle that are neither cancelled nor rejected."""
        ...

    def get_quota_usages(self, cycle_ids: list[int]) -> dict[int, int]: ...

    def find_by_national_code(
        self,
        national_code: NationalId,
        pagination: Pagination,
        status: FacilityRequestStatus | None = None,
    ) -> tuple[list[FacilityRequest], int]: ...

    def save(self, request: FacilityRequest) -> FacilityRequest: ...
