"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from refahi.application.identity.queries.get_current_user import GetCurrentUserQuery
from refahi.core import container
from refahi.database import DatabaseSession
from refahi.domain.identity.entities.user import User
from refahi.domain.identity.exceptions import UserNotFoundError
from refahi.exceptions import CredentialsException, ForbiddenError
from refahi.infrastructure.common.di import resolve_with_session
from refahi.infrastructure.identity.services.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/verify-otp")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    Args:
        token: JWT access token from Authorization header
        db: Database session

    Returns:
        User domain entity

    Raises:
        CredentialsException: If token is invalid, the user is missing or inactive
    """
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException

    handler = resolve_with_session(container.get_current_user_handler, db)

    try:
        user = handler.handle(GetCurrentUserQuery(user_id=user_id))
    except UserNotFoundError:
        raise CredentialsException from None
    if not user.is_active:
        raise CredentialsException
    return user


async def get_current_admin(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Require the current user to carry the admin flag."""
    if not current_user.is_admin:
        raise ForbiddenError("Administrator access required")
    return current_user


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[User, Depends(get_current_admin)]
