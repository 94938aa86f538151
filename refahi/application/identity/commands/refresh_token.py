from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler
from refahi.application.identity.protocols import (
    TokenPair,
    TokenServiceProtocol,
    UserRepositoryProtocol,
)
from refahi.domain.common.value_objects import UserId
from refahi.exceptions import InvalidCredentialsError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RefreshTokenCommand(Command):
    refresh_token: str


class RefreshTokenHandler(CommandHandler[RefreshTokenCommand, TokenPair]):
    def __init__(
        self, user_repository: UserRepositoryProtocol, token_service: TokenServiceProtocol
    ) -> None:
        self.user_repository = user_repository
        self.token_service = token_service

    def handle(self, command: RefreshTokenCommand) -> TokenPair:
        user_id = self.token_service.verify_refresh_token(command.refresh_token)
        if user_id is None:
            raise InvalidCredentialsError

        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None or not user.is_active:
            raise InvalidCredentialsError

        logger.info("access_token_refreshed", user_id=user.id.value)
        return self.token_service.create_token_pair(user.id.value)
