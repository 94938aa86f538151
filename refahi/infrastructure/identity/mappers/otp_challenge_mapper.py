"""Mapper for OtpChallenge ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import NationalId, OtpChallengeId, PhoneNumber
from refahi.domain.identity.entities.otp_challenge import OtpChallenge, OtpChallengeStatus
from refahi.models import OtpChallenge as OtpChallengeORM
from refahi.utils import ensure_utc, ensure_utc_or_none


class OtpChallengeMapper:
    """Mapper for OtpChallenge ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: OtpChallengeORM) -> OtpChallenge:
        return OtpChallenge(
            id=OtpChallengeId(orm_model.id),
            national_code=NationalId(orm_model.national_code),
            phone_number=PhoneNumber(orm_model.phone_number),
            code_hash=orm_model.code_hash,
            expires_at=ensure_utc(orm_model.expires_at),
            attempts_left=orm_model.attempts_left,
            status=OtpChallengeStatus(orm_model.status),
            created_at=ensure_utc_or_none(orm_model.created_at),
            verified_at=ensure_utc_or_none(orm_model.verified_at),
        )

    def to_orm(
        self, domain_entity: OtpChallenge, orm_model: OtpChallengeORM | None = None
    ) -> OtpChallengeORM:
        if orm_model:
            orm_model.status = domain_entity.status.value
            orm_model.attempts_left = domain_entity.attempts_left
            orm_model.verified_at = domain_entity.verified_at
            return orm_model

        return OtpChallengeORM(
            national_code=domain_entity.national_code.value,
            phone_number=domain_entity.phone_number.value,
            code_hash=domain_entity.code_hash,
            status=domain_entity.status.value,
            expires_at=domain_entity.expires_at,
            attempts_left=domain_entity.attempts_left,
            verified_at=domain_entity.verified_at,
            created_at=domain_entity.created_at,
        )
