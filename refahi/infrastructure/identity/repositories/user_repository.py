"""Repository for User domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from refahi.domain.common.value_objects import NationalId, UserId
from refahi.domain.identity.entities.user import User
from refahi.domain.identity.exceptions import UserNotFoundError
from refahi.infrastructure.identity.mappers.user_mapper import UserMapper
from refahi.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_national_code(self, national_code: NationalId) -> User | None:
        stmt = select(UserORM).where(UserORM.national_code == national_code.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        """
        Save a user entity.

        Changes are flushed; committing is left to the unit of work.
        """
        if user.id.value == 0:
            orm_model = self.mapper.to_orm(user)
            self.db.add(orm_model)
            self.db.flush()
            self.db.refresh(orm_model)
            logger.info(f"Created user {orm_model.id}")
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(UserORM, user.id.value)
        if not orm_model:
            raise UserNotFoundError(user.id.value)
        orm_model = self.mapper.to_orm(user, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
