"""Pydantic schemas for member API requests and responses."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from refahi.domain.membership.entities.member import Member
from refahi.infrastructure.common.schemas import SuccessResponse
from refahi.utils import utc_now


class RegisterMemberRequest(BaseModel):
    """Request schema for registering a member."""

    membership_number: str = Field(..., min_length=1, max_length=50)
    national_code: str = Field(..., min_length=8, max_length=10, description="National code")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    membership_start: datetime
    membership_end: datetime | None = None
    phone_number: str | None = None
    email: str | None = Field(None, max_length=200)
    birth_date: date | None = None
    capabilities: list[str] = Field(default_factory=list, description="Capability tags")
    features: list[str] = Field(default_factory=list, description="Feature tags")
    agencies: list[int] = Field(default_factory=list, description="Agency ids")


class UpdateMemberRequest(BaseModel):
    """Request schema for updating a member. Omitted fields are unchanged."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone_number: str | None = None
    email: str | None = Field(None, max_length=200)
    birth_date: date | None = None
    capabilities: list[str] | None = None
    features: list[str] | None = None
    agencies: list[int] | None = None
    membership_start: datetime | None = None
    membership_end: datetime | None = None
    is_active: bool | None = None


class MemberDetail(BaseModel):
    id: int
    membership_number: str
    national_code: str
    first_name: str
    last_name: str
    full_name: str
    phone_number: str | None
    email: str | None
    birth_date: date | None
    is_active: bool
    has_active_membership: bool
    membership_start: datetime
    membership_end: datetime | None
    capabilities: list[str]
    features: list[str]
    agencies: list[int]
    created_at: datetime | None

    @classmethod
    def from_domain(cls, member: Member) -> "MemberDetail":
        return cls(
            id=member.id.value,
            membership_number=member.membership_number,
            national_code=member.national_code.value,
            first_name=member.first_name,
            last_name=member.last_name,
            full_name=member.full_name,
            phone_number=member.phone_number.value if member.phone_number else None,
            email=member.email,
            birth_date=member.birth_date,
            is_active=member.is_active,
            has_active_membership=member.has_active_membership(utc_now()),
            membership_start=member.membership_start,
            membership_end=member.membership_end,
            capabilities=member.capabilities,
            features=member.features,
            agencies=member.agencies,
            created_at=member.created_at,
        )


class MemberResponse(SuccessResponse):
    member: MemberDetail
