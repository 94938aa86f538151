"""Repositories for the facilities aggregates."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

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
    QUOTA_FREE_REQUEST_STATUSES,
    FacilityCycleStatus,
    FacilityRequestStatus,
    FacilityStatus,
)
from refahi.exceptions import (
    FacilityCycleNotFoundError,
    FacilityNotFoundError,
    FacilityRequestNotFoundError,
)
from refahi.infrastructure.facilities.mappers.facility_mappers import (
    FacilityCycleMapper,
    FacilityMapper,
    FacilityRequestMapper,
)
from refahi.models import Facility as FacilityORM
from refahi.models import FacilityCycle as FacilityCycleORM
from refahi.models import FacilityRequest as FacilityRequestORM

logger = logging.getLogger(__name__)

_QUOTA_FREE = [status.value for status in QUOTA_FREE_REQUEST_STATUSES]


class FacilityRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FacilityMapper()

    def find_by_id(self, facility_id: FacilityId) -> Facility | None:
        orm_model = self.db.get(FacilityORM, facility_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def code_exists(self, code: str) -> bool:
        stmt = select(FacilityORM.id).where(FacilityORM.code == code)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def find_all(
        self, pagination: Pagination, status: FacilityStatus | None = None
    ) -> tuple[list[Facility], int]:
        stmt = select(FacilityORM)
        if status is not None:
            stmt = stmt.where(FacilityORM.status == status.value)
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.order_by(FacilityORM.name, FacilityORM.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()], total

    def save(self, facility: Facility) -> Facility:
        if facility.id.value == 0:
            orm_model = self.mapper.to_orm(facility)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(FacilityORM, facility.id.value)
            if orm_model is None:
                raise FacilityNotFoundError(facility.id.value)
            self.mapper.to_orm(facility, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved facility {orm_model.id}")
        return self.mapper.to_domain(orm_model)


class FacilityCycleRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FacilityCycleMapper()

    def find_by_id(self, cycle_id: FacilityCycleId) -> FacilityCycle | None:
        orm_model = self.db.get(FacilityCycleORM, cycle_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_facility(
        self, facility_id: FacilityId, status: FacilityCycleStatus | None = None
    ) -> list[FacilityCycle]:
        stmt = select(FacilityCycleORM).where(FacilityCycleORM.facility_id == facility_id.value)
        if status is not None:
            stmt = stmt.where(FacilityCycleORM.status == status.value)
        stmt = stmt.order_by(FacilityCycleORM.start_date.desc(), FacilityCycleORM.id)
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def save(self, cycle: FacilityCycle) -> FacilityCycle:
        if cycle.id.value == 0:
            orm_model = self.mapper.to_orm(cycle)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(FacilityCycleORM, cycle.id.value)
            if orm_model is None:
                raise FacilityCycleNotFoundError(cycle.id.value)
            self.mapper.to_orm(cycle, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved facility cycle {orm_model.id}")
        return self.mapper.to_domain(orm_model)


class FacilityRequestRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FacilityRequestMapper()

    def find_by_id(self, request_id: FacilityRequestId) -> FacilityRequest | None:
        orm_model = self.db.get(FacilityRequestORM, request_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_idempotency_key(self, key: str, member_id: MemberId) -> FacilityRequest | None:
        stmt = select(FacilityRequestORM).where(
            FacilityRequestORM.idempotency_key == key,
            FacilityRequestORM.member_id == member_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_last_for_member(
        self, cycle_id: FacilityCycleId, member_id: MemberId
    ) -> FacilityRequest | None:
        stmt = (
            select(FacilityRequestORM)
            .where(
                FacilityRequestORM.cycle_id == cycle_id.value,
                FacilityRequestORM.member_id == member_id.value,
            )
            .order_by(FacilityRequestORM.id.desc())
            .limit(1)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def count_quota_usage(self, cycle_id: FacilityCycleId) -> int:
        return self.get_quota_usages([cycle_id.value]).get(cycle_id.value, 0)

    def get_quota_usages(self, cycle_ids: list[int]) -> dict[int, int]:
        if not cycle_ids:
            return {}
        stmt = (
            select(FacilityRequestORM.cycle_id, func.count(FacilityRequestORM.id))
            .where(
                FacilityRequestORM.cycle_id.in_(cycle_ids),
                FacilityRequestORM.status.not_in(_QUOTA_FREE),
            )
            .group_by(FacilityRequestORM.cycle_id)
        )
        return {cycle_id: count for cycle_id, count in self.db.execute(stmt).all()}

    def find_by_national_code(
        self,
        national_code: NationalId,
        pagination: Pagination,
        status: FacilityRequestStatus | None = None,
    ) -> tuple[list[FacilityRequest], int]:
        stmt = select(FacilityRequestORM).where(
            FacilityRequestORM.national_code == national_code.value
        )
        if status is not None:
            stmt = stmt.where(FacilityRequestORM.status == status.value)
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.order_by(FacilityRequestORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()], total

    def save(self, request: FacilityRequest) -> FacilityRequest:
        if request.id.value == 0:
            orm_model = self.mapper.to_orm(request)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(FacilityRequestORM, request.id.value)
            if orm_model is None:
                raise FacilityRequestNotFoundError(request.id.value)
            self.mapper.to_orm(request, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved facility request {orm_model.request_number}")
        return self.mapper.to_domain(orm_model)
