"""Repository for TourReservation aggregates."""

import logging
from datetime import datetime

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.orm import Session, selectinload

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import (
    ReservationId,
    TourCapacityId,
    TourId,
    UserId,
)
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus
from refahi.exceptions import ReservationNotFoundError
from refahi.infrastructure.recreation.mappers.reservation_mapper import ReservationMapper
from refahi.models import ReservationParticipant as ParticipantORM
from refahi.models import TourReservation as TourReservationORM

logger = logging.getLogger(__name__)


def _holds_seats(now: datetime) -> ColumnElement[bool]:
    """Confirmed and paying reservations, plus holds that have not expired yet."""
    return or_(
        TourReservationORM.status.in_(
            [ReservationStatus.CONFIRMED.value, ReservationStatus.PAYING.value]
        ),
        and_(
            TourReservationORM.status == ReservationStatus.ON_HOLD.value,
            TourReservationORM.expiry_date > now,
        ),
    )


class ReservationRepository:
    """Repository for TourReservation aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ReservationMapper()

    def _load(self) -> Select[tuple[TourReservationORM]]:
        return select(TourReservationORM).options(
            selectinload(TourReservationORM.participants),
            selectinload(TourReservationORM.price_snapshots),
        )

    def find_by_id(self, reservation_id: ReservationId) -> TourReservation | None:
        orm_model = self.db.get(TourReservationORM, reservation_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_tracking_code(self, tracking_code: str) -> TourReservation | None:
        stmt = self._load().where(TourReservationORM.tracking_code == tracking_code)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def tracking_code_exists(self, tracking_code: str) -> bool:
        stmt = select(TourReservationORM.id).where(
            TourReservationORM.tracking_code == tracking_code
        )
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def find_by_tour_and_national_numbers(
        self, tour_ids: list[int], national_numbers: list[str]
    ) -> list[TourReservation]:
        if not tour_ids or not national_numbers:
            return []
        matching = (
            select(ParticipantORM.reservation_id)
            .where(ParticipantORM.national_number.in_(national_numbers))
            .distinct()
        )
        stmt = (
            self._load()
            .where(
                TourReservationORM.tour_id.in_(tour_ids),
                TourReservationORM.id.in_(matching),
            )
            .order_by(TourReservationORM.id)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def find_by_user(
        self,
        user_id: UserId,
        pagination: Pagination,
        status: ReservationStatus | None = None,
    ) -> tuple[list[TourReservation], int]:
        """The user's reservations, newest first."""
        stmt = select(TourReservationORM).where(TourReservationORM.user_id == user_id.value)
        if status is not None:
            stmt = stmt.where(TourReservationORM.status == status.value)
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.options(
                selectinload(TourReservationORM.participants),
                selectinload(TourReservationORM.price_snapshots),
            )
            .order_by(TourReservationORM.reservation_date.desc(), TourReservationORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        reservations = [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]
        return reservations, total

    def find_expired_holds(self, now: datetime) -> list[TourReservation]:
        stmt = (
            self._load()
            .where(
                TourReservationORM.status == ReservationStatus.ON_HOLD.value,
                TourReservationORM.expiry_date.is_not(None),
                TourReservationORM.expiry_date < now,
            )
            .order_by(TourReservationORM.expiry_date)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def _participant_count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = (
            select(func.count(ParticipantORM.id))
            .join(TourReservationORM, ParticipantORM.reservation_id == TourReservationORM.id)
            .where(*criteria)
        )
        return self.db.execute(stmt).scalar_one() or 0

    def get_capacity_utilization(self, capacity_id: TourCapacityId, now: datetime) -> int:
        """Participants on reservations that currently hold seats of the capacity."""
        return self._participant_count(
            TourReservationORM.capacity_id == capacity_id.value, _holds_seats(now)
        )

    def get_tour_utilization(self, tour_id: TourId, now: datetime) -> int:
        return self._participant_count(
            TourReservationORM.tour_id == tour_id.value, _holds_seats(now)
        )

    def get_capacity_utilizations(self, tour_id: TourId, now: datetime) -> dict[int, int]:
        stmt = (
            select(TourReservationORM.capacity_id, func.count(ParticipantORM.id))
            .join(TourReservationORM, ParticipantORM.reservation_id == TourReservationORM.id)
            .where(
                TourReservationORM.tour_id == tour_id.value,
                TourReservationORM.capacity_id.is_not(None),
                _holds_seats(now),
            )
            .group_by(TourReservationORM.capacity_id)
        )
        return {capacity_id: count for capacity_id, count in self.db.execute(stmt).all()}

    def save(self, reservation: TourReservation) -> TourReservation:
        if reservation.id.value == 0:
            orm_model = self.mapper.to_orm(reservation)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(TourReservationORM, reservation.id.value)
            if orm_model is None:
                raise ReservationNotFoundError(reservation.id.value)
            self.mapper.to_orm(reservation, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved reservation {orm_model.id}")
        return self.mapper.to_domain(orm_model)
