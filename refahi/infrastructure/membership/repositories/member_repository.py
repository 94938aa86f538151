"""Repository for Member aggregates."""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import MemberId, NationalId
from refahi.domain.membership.entities.member import Member
from refahi.exceptions import MemberNotFoundError
from refahi.infrastructure.membership.mappers.member_mapper import MemberMapper
from refahi.models import Member as MemberORM

logger = logging.getLogger(__name__)


class MemberRepository:
    """Repository for Member aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = MemberMapper()

    def find_by_id(self, member_id: MemberId) -> Member | None:
        orm_model = self.db.get(MemberORM, member_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_national_code(self, national_code: NationalId) -> Member | None:
        stmt = select(MemberORM).where(MemberORM.national_code == national_code.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def national_code_exists(self, national_code: NationalId) -> bool:
        stmt = select(MemberORM.id).where(MemberORM.national_code == national_code.value)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def membership_number_exists(self, membership_number: str) -> bool:
        stmt = select(MemberORM.id).where(MemberORM.membership_number == membership_number)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def find_all(
        self, pagination: Pagination, search: str | None = None
    ) -> tuple[list[Member], int]:
        """
        List members ordered by last name.

        Args:
            pagination: Page to return
            search: Matches first name, last name or the start of the national code

        Returns:
            Tuple of (members on the page, total matching members)
        """
        stmt = select(MemberORM)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    MemberORM.first_name.ilike(pattern),
                    MemberORM.last_name.ilike(pattern),
                    MemberORM.national_code.startswith(search),
                )
            )
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.order_by(MemberORM.last_name, MemberORM.first_name, MemberORM.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        members = [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]
        return members, total

    def save(self, member: Member) -> Member:
        """Flush a new or changed member; committing is left to the unit of work."""
        if member.id.value == 0:
            orm_model = self.mapper.to_orm(member)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(MemberORM, member.id.value)
            if orm_model is None:
                raise MemberNotFoundError(member.id.value)
            self.mapper.to_orm(member, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved member {orm_model.id}")
        return self.mapper.to_domain(orm_model)
