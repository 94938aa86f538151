"""Send a one-time password to the phone of a national code."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.identity.protocols import (
    OtpChallengeRepositoryProtocol,
    OtpServiceProtocol,
)
from refahi.config import Settings
from refahi.domain.common.value_objects import NationalId, PhoneNumber
from refahi.domain.identity.entities.otp_challenge import OtpChallenge
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SendOtpCommand(Command):
    national_code: str
    phone_number: str


@dataclass(frozen=True)
class SendOtpResult:
    challenge_id: int
    expires_at: datetime


class SendOtpHandler(CommandHandler[SendOtpCommand, SendOtpResult]):
    """Issue a challenge and deliver its code."""

    def __init__(
        self,
        challenge_repository: OtpChallengeRepositoryProtocol,
        otp_service: OtpServiceProtocol,
        code_generator: Callable[[int], str],
        uow: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.challenge_repository = challenge_repository
        self.otp_service = otp_service
        self.code_generator = code_generator
        self.uow = uow
        self.settings = settings

    def handle(self, command: SendOtpCommand) -> SendOtpResult:
        national_code = NationalId(command.national_code)
        phone_number = PhoneNumber(command.phone_number)
        code = self.code_generator(self.settings.OTP_LENGTH)

        with self.uow:
            challenge = OtpChallenge.issue(
                national_code=national_code,
                phone_number=phone_number,
                code_hash=self.otp_service.hash_code(code),
                now=utc_now(),
                ttl_seconds=self.settings.OTP_TTL_SECONDS,
                max_attempts=self.settings.OTP_MAX_VERIFY_ATTEMPTS,
            )
            challenge = self.challenge_repository.save(challenge)
            self.uow.commit()

        # No SMS provider; outside production the code is delivered through the log
        logger.info(
            "otp_sent",
            challenge_id=challenge.id.value,
            phone_number=phone_number.masked,
            code=code if self.settings.ENVIRONMENT != "production" else "<redacted>",
        )
        return SendOtpResult(challenge_id=challenge.id.value, expires_at=challenge.expires_at)
