from .auth_schemas import (
    LoginResponse,
    RefreshTokenRequest,
    SendOtpRequest,
    SendOtpResponse,
    TokenResponse,
    UserResponse,
    VerifyOtpRequest,
)

__all__ = [
    "LoginResponse",
    "RefreshTokenRequest",
    "SendOtpRequest",
    "SendOtpResponse",
    "TokenResponse",
    "UserResponse",
    "VerifyOtpRequest",
]
