"""Mappers for Facility, FacilityCycle and FacilityRequest ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import (
    FacilityCycleId,
    FacilityId,
    FacilityRequestId,
    MemberId,
    Money,
    NationalId,
)
from refahi.domain.facilities.entities.facility import Facility
from refahi.domain.facilities.entities.facility_cycle import FacilityCycle
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.domain.facilities.enums import (
    FacilityCycleStatus,
    FacilityRequestStatus,
    FacilityStatus,
    FacilityType,
)
from refahi.models import Facility as FacilityORM
from refahi.models import FacilityCycle as FacilityCycleORM
from refahi.models import FacilityRequest as FacilityRequestORM
from refahi.utils import ensure_utc, ensure_utc_or_none


class FacilityMapper:
    def to_domain(self, orm_model: FacilityORM) -> Facility:
        return Facility(
            id=FacilityId(orm_model.id),
            name=orm_model.name,
            code=orm_model.code,
            facility_type=FacilityType(orm_model.facility_type),
            status=FacilityStatus(orm_model.status),
            description=orm_model.description,
            bank_name=orm_model.bank_name,
            required_features=list(orm_model.required_features or []),
            prohibited_features=list(orm_model.prohibited_features or []),
            required_capabilities=list(orm_model.required_capabilities or []),
            prohibited_capabilities=list(orm_model.prohibited_capabilities or []),
            created_at=ensure_utc_or_none(orm_model.created_at),
            updated_at=ensure_utc_or_none(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Facility, orm_model: FacilityORM | None = None) -> FacilityORM:
        orm_model = orm_model or FacilityORM(code=domain_entity.code)
        orm_model.name = domain_entity.name
        orm_model.code = domain_entity.code
        orm_model.facility_type = domain_entity.facility_type.value
        orm_model.status = domain_entity.status.value
        orm_model.description = domain_entity.description
        orm_model.bank_name = domain_entity.bank_name
        orm_model.required_features = list(domain_entity.required_features)
        orm_model.prohibited_features = list(domain_entity.prohibited_features)
        orm_model.required_capabilities = list(domain_entity.required_capabilities)
        orm_model.prohibited_capabilities = list(domain_entity.prohibited_capabilities)
        return orm_model


class FacilityCycleMapper:
    def to_domain(self, orm_model: FacilityCycleORM) -> FacilityCycle:
        return FacilityCycle(
            id=FacilityCycleId(orm_model.id),
            facility_id=FacilityId(orm_model.facility_id),
            name=orm_model.name,
            start_date=ensure_utc(orm_model.start_date),
            end_date=ensure_utc(orm_model.end_date),
            quota=orm_model.quota,
            min_amount=Money(orm_model.min_amount_rials),
            max_amount=Money(orm_model.max_amount_rials),
            payment_months=orm_model.payment_months,
            interest_rate=orm_model.interest_rate,
            status=FacilityCycleStatus(orm_model.status),
            description=orm_model.description,
            approval_message=orm_model.approval_message,
            created_at=ensure_utc_or_none(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: FacilityCycle, orm_model: FacilityCycleORM | None = None
    ) -> FacilityCycleORM:
        orm_model = orm_model or FacilityCycleORM(facility_id=domain_entity.facility_id.value)
        orm_model.name = domain_entity.name
        orm_model.start_date = domain_entity.start_date
        orm_model.end_date = domain_entity.end_date
        orm_model.quota = domain_entity.quota
        orm_model.min_amount_rials = domain_entity.min_amount.amount_rials
        orm_model.max_amount_rials = domain_entity.max_amount.amount_rials
        orm_model.payment_months = domain_entity.payment_months
        orm_model.interest_rate = domain_entity.interest_rate
        orm_model.status = domain_entity.status.value
        orm_model.description = domain_entity.description
        orm_model.approval_message = domain_entity.approval_message
        return orm_model


class FacilityRequestMapper:
    def to_domain(self, orm_model: FacilityRequestORM) -> FacilityRequest:
        approved = orm_model.approved_amount_rials
        return FacilityRequest(
            id=FacilityRequestId(orm_model.id),
            facility_id=FacilityId(orm_model.facility_id),
            cycle_id=FacilityCycleId(orm_model.cycle_id),
            member_id=MemberId(orm_model.member_id),
            national_code=NationalId(orm_model.national_code),
            member_full_name=orm_model.member_full_name,
            requested_amount=Money(orm_model.requested_amount_rials),
            request_number=orm_model.request_number,
            status=FacilityRequestStatus(orm_model.status),
            approved_amount=Money(approved) if approved is not None else None,
            description=orm_model.description,
            rejection_reason=orm_model.rejection_reason,
            review_notes=orm_model.review_notes,
            idempotency_key=orm_model.idempotency_key,
            approved_at=ensure_utc_or_none(orm_model.approved_at),
            rejected_at=ensure_utc_or_none(orm_model.rejected_at),
            cancelled_at=ensure_utc_or_none(orm_model.cancelled_at),
            created_at=ensure_utc_or_none(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: FacilityRequest, orm_model: FacilityRequestORM | None = None
    ) -> FacilityRequestORM:
        orm_model = orm_model or FacilityRequestORM(
            facility_id=domain_entity.facility_id.value,
            cycle_id=domain_entity.cycle_id.value,
            member_id=domain_entity.member_id.value,
            national_code=domain_entity.national_code.value,
            request_number=domain_entity.request_number,
            idempotency_key=domain_entity.idempotency_key,
        )
        orm_model.member_full_name = domain_entity.member_full_name
        orm_model.requested_amount_rials = domain_entity.requested_amount.amount_rials
        orm_model.approved_amount_rials = (
            domain_entity.approved_amount.amount_rials if domain_entity.approved_amount else None
        )
        orm_model.status = domain_entity.status.value
        orm_model.description = domain_entity.description
        orm_model.rejection_reason = domain_entity.rejection_reason
        orm_model.review_notes = domain_entity.review_notes
        orm_model.approved_at = domain_entity.approved_at
        orm_model.rejected_at = domain_entity.rejected_at
        orm_model.cancelled_at = domain_entity.cancelled_at
        return orm_model
