"""Mapper for User ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import NationalId, PhoneNumber, UserId
from refahi.domain.identity.entities.user import User
from refahi.models import User as UserORM
from refahi.utils import ensure_utc_or_none


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            national_code=NationalId(orm_model.national_code),
            phone_number=PhoneNumber(orm_model.phone_number),
            is_admin=orm_model.is_admin,
            is_active=orm_model.is_active,
            created_at=ensure_utc_or_none(orm_model.created_at),
            updated_at=ensure_utc_or_none(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing
            orm_model.phone_number = domain_entity.phone_number.value
            orm_model.is_admin = domain_entity.is_admin
            orm_model.is_active = domain_entity.is_active
            return orm_model

        # Create new
        return UserORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            national_code=domain_entity.national_code.value,
            phone_number=domain_entity.phone_number.value,
            is_admin=domain_entity.is_admin,
            is_active=domain_entity.is_active,
        )
