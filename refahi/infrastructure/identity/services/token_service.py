"""JWT access and refresh tokens for authenticated users."""

from datetime import UTC, datetime, timedelta
from typing import Literal

import jwt
from jwt import InvalidTokenError

from refahi.application.identity.protocols import TokenPair
from refahi.config import get_settings

settings = get_settings()
# Development fallback; production requires SECRET_KEY
SECRET_KEY = settings.SECRET_KEY or "refahi-development-secret-key-do-not-use-in-production"
REFRESH_TOKEN_SECRET_KEY = settings.REFRESH_TOKEN_SECRET_KEY or SECRET_KEY
ALGORITHM = "HS256"

TokenKind = Literal["access", "refresh"]

_KEYS: dict[TokenKind, str] = {"access": SECRET_KEY, "refresh": REFRESH_TOKEN_SECRET_KEY}
_LIFETIMES: dict[TokenKind, timedelta] = {
    "access": timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    "refresh": timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
}


def _encode(user_id: int, kind: TokenKind) -> str:
    now = datetime.now(UTC)
    claims = {"sub": str(user_id), "type": kind, "iat": now, "exp": now + _LIFETIMES[kind]}
    return jwt.encode(claims, _KEYS[kind], algorithm=ALGORITHM)


def _decode(token: str, kind: TokenKind) -> int | None:
    """Return the user id of a valid token of ``kind``, otherwise None."""
    try:
        claims = jwt.decode(token, _KEYS[kind], algorithms=[ALGORITHM])
        # An access token is never accepted as a refresh token and vice versa
        if claims.get("type") != kind:
            return None
        return int(claims["sub"])
    except (InvalidTokenError, KeyError, ValueError):
        return None


def create_access_token(user_id: int) -> str:
    return _encode(user_id, "access")


def verify_access_token(token: str) -> int | None:
    return _decode(token, "access")


def verify_refresh_token(token: str) -> int | None:
    return _decode(token, "refresh")


def create_token_pair(user_id: int) -> TokenPair:
    return TokenPair(
        access_token=_encode(user_id, "access"),
        refresh_token=_encode(user_id, "refresh"),
        token_type="bearer",  # noqa: S106
        expires_in=int(_LIFETIMES["access"].total_seconds()),
    )
