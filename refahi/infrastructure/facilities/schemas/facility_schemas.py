"""Pydantic schemas for facility API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from refahi.application.facilities.dtos import CycleQuota
from refahi.domain.facilities.entities.facility import (
    MAX_CODE_LENGTH,
    MAX_NAME_LENGTH,
    Facility,
)
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.domain.facilities.enums import (
    FacilityCycleStatus,
    FacilityRequestStatus,
    FacilityStatus,
    FacilityType,
)
from refahi.infrastructure.common.schemas import SuccessResponse


class CreateFacilityRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    code: str = Field(..., min_length=1, max_length=MAX_CODE_LENGTH)
    facility_type: FacilityType
    description: str | None = None
    bank_name: str | None = Field(None, max_length=200)
    required_features: list[str] = Field(default_factory=list)
    prohibited_features: list[str] = Field(default_factory=list)
    required_capabilities: list[str] = Field(default_factory=list)
    prohibited_capabilities: list[str] = Field(default_factory=list)


class CreateCycleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    start_date: datetime
    end_date: datetime
    quota: int = Field(..., gt=0)
    min_amount_rials: int = Field(..., ge=0)
    max_amount_rials: int = Field(..., ge=0)
    payment_months: int = Field(12, gt=0)
    interest_rate: float = Field(0.0, ge=0, le=1)
    description: str | None = None
    approval_message: str | None = Field(None, max_length=1000)


class SubmitFacilityRequest(BaseModel):
    """A member's request for a facility in a cycle."""

    amount_rials: int = Field(..., gt=0)
    description: str | None = Field(None, max_length=1000)
    idempotency_key: str | None = Field(None, max_length=100)


class ApproveRequest(BaseModel):
    approved_amount_rials: int = Field(..., gt=0)
    notes: str | None = Field(None, max_length=1000)


class RejectRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)


class CancelRequest(BaseModel):
    reason: str | None = Field(None, max_length=1000)


class FacilitySchema(BaseModel):
    id: int
    name: str
    code: str
    facility_type: FacilityType
    status: FacilityStatus
    description: str | None
    bank_name: str | None
    required_features: list[str]
    prohibited_features: list[str]
    required_capabilities: list[str]
    prohibited_capabilities: list[str]
    created_at: datetime | None

    @classmethod
    def from_domain(cls, facility: Facility) -> "FacilitySchema":
        return cls(
            id=facility.id.value,
            name=facility.name,
            code=facility.code,
            facility_type=facility.facility_type,
            status=facility.status,
            description=facility.description,
            bank_name=facility.bank_name,
            required_features=facility.required_features,
            prohibited_features=facility.prohibited_features,
            required_capabilities=facility.required_capabilities,
            prohibited_capabilities=facility.prohibited_capabilities,
            created_at=facility.created_at,
        )


class CycleSchema(BaseModel):
    id: int
    facility_id: int
    name: str
    start_date: datetime
    end_date: datetime
    quota: int
    used_quota: int
    remaining_quota: int
    min_amount_rials: int
    max_amount_rials: int
    payment_months: int
    interest_rate: float
    status: FacilityCycleStatus
    description: str | None
    approval_message: str | None

    @classmethod
    def from_quota(cls, quota: CycleQuota) -> "CycleSchema":
        cycle = quota.cycle
        return cls(
            id=cycle.id.value,
            facility_id=cycle.facility_id.value,
            name=cycle.name,
            start_date=cycle.start_date,
            end_date=cycle.end_date,
            quota=cycle.quota,
            used_quota=quota.used_quota,
            remaining_quota=quota.remaining_quota,
            min_amount_rials=cycle.min_amount.amount_rials,
            max_amount_rials=cycle.max_amount.amount_rials,
            payment_months=cycle.payment_months,
            interest_rate=cycle.interest_rate,
            status=cycle.status,
            description=cycle.description,
            approval_message=cycle.approval_message,
        )


class FacilityRequestSchema(BaseModel):
    id: int
    request_number: str
    facility_id: int
    cycle_id: int
    member_full_name: str
    national_code: str
    requested_amount_rials: int
    approved_amount_rials: int | None
    final_amount_rials: int
    status: FacilityRequestStatus
    description: str | None
    rejection_reason: str | None
    review_notes: str | None
    approved_at: datetime | None
    rejected_at: datetime | None
    cancelled_at: datetime | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, request: FacilityRequest) -> "FacilityRequestSchema":
        return cls(
            id=request.id.value,
            request_number=request.request_number,
            facility_id=request.facility_id.value,
            cycle_id=request.cycle_id.value,
            member_full_name=request.member_full_name,
            national_code=request.national_code.value,
            requested_amount_rials=request.requested_amount.amount_rials,
            approved_amount_rials=(
                request.approved_amount.amount_rials if request.approved_amount else None
            ),
            final_amount_rials=request.final_amount.amount_rials,
            status=request.status,
            description=request.description,
            rejection_reason=request.rejection_reason,
            review_notes=request.review_notes,
            approved_at=request.approved_at,
            rejected_at=request.rejected_at,
            cancelled_at=request.cancelled_at,
            created_at=request.created_at,
        )


class FacilityResponse(SuccessResponse):
    facility: FacilitySchema


class CycleResponse(SuccessResponse):
    cycle_id: int
    status: FacilityCycleStatus


class FacilityRequestResponse(SuccessResponse):
    request: FacilityRequestSchema
