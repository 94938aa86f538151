from typing import Protocol

from refahi.domain.common.value_objects import OtpChallengeId
from refahi.domain.identity.entities.otp_challenge import OtpChallenge


class OtpChallengeRepositoryProtocol(Protocol):
    def find_by_id(self, challenge_id: OtpChallengeId) -> OtpChallenge | None: ...

    def save(self, challenge: OtpChallenge) -> OtpChallenge: ...
