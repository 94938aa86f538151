"""One-time password challenge issued during login."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from refahi.domain.common.entity import Entity
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import NationalId, OtpChallengeId, PhoneNumber


class OtpChallengeStatus(StrEnum):
    SENT = "Sent"
    VERIFIED = "Verified"
    EXPIRED = "Expired"
    LOCKED = "Locked"
    CONSUMED = "Consumed"


@dataclass
class OtpChallenge(Entity[OtpChallengeId]):
    """
    A hashed one-time code sent to a phone number.

    Business Rules:
    - Only the hash of the code is stored
    - A challenge can be verified once, before it expires
    - Each wrong guess uses up an attempt; no attempts left locks the challenge
    - A verified challenge is consumed by issuing tokens, exactly once
    """

    id: OtpChallengeId
    national_code: NationalId
    phone_number: PhoneNumber
    code_hash: str
    expires_at: datetime
    attempts_left: int
    status: OtpChallengeStatus = OtpChallengeStatus.SENT
    created_at: datetime | None = None
    verified_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.attempts_left < 0:
            raise ValidationError("Attempts left cannot be negative", field="attempts_left")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def attempt_verification(
        self, code: str, verifier: Callable[[str, str], bool], now: datetime
    ) -> bool:
        """
        Check a submitted code against the stored hash.

        Args:
            code: The code typed by the user
            verifier: Compares a plain code with ``code_hash``
            now: Current time

        Returns:
            True if the code matched and the challenge is now verified
        """
        if self.status != OtpChallengeStatus.SENT:
            return False
        if self.is_expired(now):
            self.status = OtpChallengeStatus.EXPIRED
            return False
        if self.attempts_left <= 0:
            self.status = OtpChallengeStatus.LOCKED
            return False

        self.attempts_left -= 1
        if verifier(code, self.code_hash):
            self.status = OtpChallengeStatus.VERIFIED
            self.verified_at = now
            return True

        if self.attempts_left == 0:
            self.status = OtpChallengeStatus.LOCKED
        return False

    def consume(self) -> None:
        if self.status != OtpChallengeStatus.VERIFIED:
            raise BusinessRuleViolationError(
                "otp_consume_requires_verified", "Verification code has not been verified"
            )
        self.status = OtpChallengeStatus.CONSUMED

    @classmethod
    def issue(
        cls,
        national_code: NationalId,
        phone_number: PhoneNumber,
        code_hash: str,
        now: datetime,
        ttl_seconds: int,
        max_attempts: int,
    ) -> "OtpChallenge":
        """Create a new challenge (ID will be 0 until persisted)."""
        return cls(
            id=OtpChallengeId.generate(),
            national_code=national_code,
            phone_number=phone_number,
            code_hash=code_hash,
            expires_at=now + timedelta(seconds=ttl_seconds),
            attempts_left=max_attempts,
            created_at=now,
        )
