"""Repository for one-time password challenges."""

from sqlalchemy.orm import Session

from refahi.domain.common.value_objects import OtpChallengeId
from refahi.domain.identity.entities.otp_challenge import OtpChallenge
from refahi.infrastructure.identity.mappers.otp_challenge_mapper import OtpChallengeMapper
from refahi.models import OtpChallenge as OtpChallengeORM


class OtpChallengeRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = OtpChallengeMapper()

    def find_by_id(self, challenge_id: OtpChallengeId) -> OtpChallenge | None:
        orm_model = self.db.get(OtpChallengeORM, challenge_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, challenge: OtpChallenge) -> OtpChallenge:
        if challenge.id.value == 0:
            orm_model = self.mapper.to_orm(challenge)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(OtpChallengeORM, challenge.id.value)
            if orm_model is None:
                raise ValueError(f"OTP challenge with id {challenge.id.value} not found")
            self.mapper.to_orm(challenge, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
