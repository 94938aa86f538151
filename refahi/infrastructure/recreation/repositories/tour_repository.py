"""Repository for Tour aggregates."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import TourId
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.enums import TourStatus
from refahi.exceptions import TourNotFoundError
from refahi.infrastructure.recreation.mappers.tour_mapper import TourMapper
from refahi.models import Tour as TourORM

logger = logging.getLogger(__name__)


class TourRepository:
    """Repository for Tour aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = TourMapper()

    def find_by_id(self, tour_id: TourId) -> Tour | None:
        orm_model = self.db.get(TourORM, tour_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_ids(self, tour_ids: list[int]) -> list[Tour]:
        if not tour_ids:
            return []
        stmt = select(TourORM).where(TourORM.id.in_(tour_ids)).order_by(TourORM.id)
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def find_active(
        self, pagination: Pagination, status: TourStatus | None = None
    ) -> tuple[list[Tour], int]:
        """Active tours ordered by start date."""
        stmt = select(TourORM).where(TourORM.is_active.is_(True))
        if status is not None:
            stmt = stmt.where(TourORM.status == status.value)
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.options(selectinload(TourORM.capacities), selectinload(TourORM.pricing))
            .order_by(TourORM.tour_start, TourORM.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        tours = [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]
        return tours, total

    def save(self, tour: Tour) -> Tour:
        if tour.id.value == 0:
            orm_model = self.mapper.to_orm(tour)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(TourORM, tour.id.value)
            if orm_model is None:
                raise TourNotFoundError(tour.id.value)
            self.mapper.to_orm(tour, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved tour {orm_model.id}")
        return self.mapper.to_domain(orm_model)
