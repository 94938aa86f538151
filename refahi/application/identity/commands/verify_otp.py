"""Verify a one-time password and log the user in."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.identity.protocols import (
    OtpChallengeRepositoryProtocol,
    OtpServiceProtocol,
    TokenPair,
    TokenServiceProtocol,
    UserRepositoryProtocol,
)
from refahi.config import Settings
from refahi.domain.common.value_objects import OtpChallengeId
from refahi.domain.identity.entities.user import User
from refahi.exceptions import InvalidOtpError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VerifyOtpCommand(Command):
    challenge_id: int
    code: str


@dataclass(frozen=True)
class VerifyOtpResult:
    user: User
    tokens: TokenPair
    is_new_user: bool


class VerifyOtpHandler(CommandHandler[VerifyOtpCommand, VerifyOtpResult]):
    """
    Check the submitted code and issue tokens.

    Users are created on their first successful login. National codes listed
    in ``ADMIN_NATIONAL_CODES`` receive the admin flag.
    """

    def __init__(
        self,
        challenge_repository: OtpChallengeRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        otp_service: OtpServiceProtocol,
        token_service: TokenServiceProtocol,
        uow: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.challenge_repository = challenge_repository
        self.user_repository = user_repository
        self.otp_service = otp_service
        self.token_service = token_service
        self.uow = uow
        self.settings = settings

    def handle(self, command: VerifyOtpCommand) -> VerifyOtpResult:
        with self.uow:
            challenge = self.challenge_repository.find_by_id(OtpChallengeId(command.challenge_id))
            if challenge is None:
                raise InvalidOtpError

            verified = challenge.attempt_verification(
                command.code, self.otp_service.verify_code, utc_now()
            )
            if not verified:
                # Used attempts and the new status must survive the failure
                self.challenge_repository.save(challenge)
                self.uow.commit()
                logger.info(
                    "otp_verification_failed",
                    challenge_id=challenge.id.value,
                    status=challenge.status.value,
                    attempts_left=challenge.attempts_left,
                )
                raise InvalidOtpError

            is_admin = challenge.national_code.value in self.settings.ADMIN_NATIONAL_CODES
            user = self.user_repository.find_by_national_code(challenge.national_code)
            is_new_user = user is None
            if user is None:
                user = User.create(
                    national_code=challenge.national_code,
                    phone_number=challenge.phone_number,
                    is_admin=is_admin,
                )
            else:
                user.update_phone_number(challenge.phone_number)
                if is_admin:
                    user.grant_admin()
            user = self.user_repository.save(user)

            challenge.consume()
            self.challenge_repository.save(challenge)
            self.uow.commit()

        tokens = self.token_service.create_token_pair(user.id.value)
        logger.info("user_logged_in", user_id=user.id.value, is_new_user=is_new_user)
        return VerifyOtpResult(user=user, tokens=tokens, is_new_user=is_new_user)
