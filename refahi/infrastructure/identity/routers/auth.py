"""API routes for one-time password login."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from refahi.application.identity.commands.refresh_token import (
    RefreshTokenCommand,
    RefreshTokenHandler,
)
from refahi.application.identity.commands.send_otp import SendOtpCommand, SendOtpHandler
from refahi.application.identity.commands.verify_otp import VerifyOtpCommand, VerifyOtpHandler
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.identity.dependencies import CurrentUser
from refahi.infrastructure.identity.schemas import (
    LoginResponse,
    RefreshTokenRequest,
    SendOtpRequest,
    SendOtpResponse,
    TokenResponse,
    UserResponse,
    VerifyOtpRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)


@router.post("/send-otp", response_model=SendOtpResponse, status_code=status.HTTP_200_OK)
@limiter.limit("5/minute")  # type: ignore[misc]
def send_otp(
    request: Request,
    body: SendOtpRequest,
    handler: SendOtpHandler = Depends(inject_handler(container.send_otp_handler)),
) -> SendOtpResponse:
    """Send a verification code to the given mobile number."""
    try:
        result = handler.handle(
            SendOtpCommand(national_code=body.national_code, phone_number=body.phone_number)
        )
        return SendOtpResponse(
            success=True,
            message="Verification code sent",
            challenge_id=result.challenge_id,
            expires_at=result.expires_at,
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to send verification code: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/verify-otp", response_model=LoginResponse, status_code=status.HTTP_200_OK)
@limiter.limit("10/minute")  # type: ignore[misc]
def verify_otp(
    request: Request,
    body: VerifyOtpRequest,
    handler: VerifyOtpHandler = Depends(inject_handler(container.verify_otp_handler)),
) -> LoginResponse:
    """Exchange a verification code for an access and refresh token."""
    try:
        result = handler.handle(VerifyOtpCommand(challenge_id=body.challenge_id, code=body.code))
        tokens = TokenResponse.from_pair(result.tokens)
        return LoginResponse(
            **tokens.model_dump(),
            is_new_user=result.is_new_user,
            user=UserResponse.from_domain(result.user),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to verify code for challenge {body.challenge_id}: {e!s}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/refresh", response_model=TokenResponse, status_code=status.HTTP_200_OK)
@limiter.limit("10/minute")  # type: ignore[misc]
def refresh(
    request: Request,
    body: RefreshTokenRequest,
    handler: RefreshTokenHandler = Depends(inject_handler(container.refresh_token_handler)),
) -> TokenResponse:
    """Issue a new token pair from a refresh token."""
    try:
        return TokenResponse.from_pair(
            handler.handle(RefreshTokenCommand(refresh_token=body.refresh_token))
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to refresh token: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/me", response_model=UserResponse, status_code=status.HTTP_200_OK)
def get_me(current_user: CurrentUser) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.from_domain(current_user)
