"""Pydantic schemas for authentication API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from refahi.application.identity.protocols import TokenPair
from refahi.domain.identity.entities.user import User
from refahi.infrastructure.common.schemas import SuccessResponse


class SendOtpRequest(BaseModel):
    """Request to send a one-time password."""

    national_code: str = Field(..., min_length=8, max_length=10, description="National code")
    phone_number: str = Field(..., min_length=10, max_length=20, description="Mobile number")


class SendOtpResponse(SuccessResponse):
    challenge_id: int
    expires_at: datetime


class VerifyOtpRequest(BaseModel):
    """Request to verify a one-time password."""

    challenge_id: int = Field(..., gt=0, description="Challenge returned by send-otp")
    code: str = Field(..., min_length=1, max_length=12, description="Code received by SMS")


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int

    @classmethod
    def from_pair(cls, pair: TokenPair) -> "TokenResponse":
        return cls(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            token_type=pair.token_type,
            expires_in=pair.expires_in,
        )


class UserResponse(BaseModel):
    """Schema for user response."""

    id: int
    national_code: str
    phone_number: str
    is_admin: bool
    is_active: bool
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id.value,
            national_code=user.national_code.value,
            phone_number=user.phone_number.value,
            is_admin=user.is_admin,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class LoginResponse(TokenResponse):
    is_new_user: bool
    user: UserResponse
