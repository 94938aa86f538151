"""Mapper for Member ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import MemberId, NationalId, PhoneNumber
from refahi.domain.membership.entities.member import Member
from refahi.models import Member as MemberORM
from refahi.utils import ensure_utc, ensure_utc_or_none


class MemberMapper:
    """Mapper for Member ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: MemberORM) -> Member:
        """Convert ORM model to domain entity."""
        return Member(
            id=MemberId(orm_model.id),
            membership_number=orm_model.membership_number,
            national_code=NationalId(orm_model.national_code),
            first_name=orm_model.first_name,
            last_name=orm_model.last_name,
            membership_start=ensure_utc(orm_model.membership_start),
            membership_end=ensure_utc_or_none(orm_model.membership_end),
            phone_number=PhoneNumber(orm_model.phone_number) if orm_model.phone_number else None,
            email=orm_model.email,
            birth_date=orm_model.birth_date,
            is_active=orm_model.is_active,
            capabilities=list(orm_model.capabilities or []),
            features=list(orm_model.features or []),
            agencies=list(orm_model.agencies or []),
            created_at=ensure_utc_or_none(orm_model.created_at),
            updated_at=ensure_utc_or_none(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Member, orm_model: MemberORM | None = None) -> MemberORM:
        """Convert domain entity to ORM model."""
        orm_model = orm_model or MemberORM(
            membership_number=domain_entity.membership_number,
            national_code=domain_entity.national_code.value,
        )
        orm_model.membership_number = domain_entity.membership_number
        orm_model.first_name = domain_entity.first_name
        orm_model.last_name = domain_entity.last_name
        orm_model.phone_number = (
            domain_entity.phone_number.value if domain_entity.phone_number else None
        )
        orm_model.email = domain_entity.email
        orm_model.birth_date = domain_entity.birth_date
        orm_model.is_active = domain_entity.is_active
        orm_model.membership_start = domain_entity.membership_start
        orm_model.membership_end = domain_entity.membership_end
        # Reassign lists so JSON columns register the change
        orm_model.capabilities = list(domain_entity.capabilities)
        orm_model.features = list(domain_entity.features)
        orm_model.agencies = list(domain_entity.agencies)
        return orm_model
