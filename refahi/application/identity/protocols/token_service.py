from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token issued after login."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int


class TokenServiceProtocol(Protocol):
    def create_token_pair(self, user_id: int) -> TokenPair: ...

    def verify_refresh_token(self, token: str) -> int | None: ...
