from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler
from refahi.application.recreation.dtos import ReservationDetail
from refahi.application.recreation.protocols import (
    ReservationRepositoryProtocol,
    TourRepositoryProtocol,
)
from refahi.domain.common.value_objects import ReservationId, UserId
from refahi.exceptions import ForbiddenError, ReservationNotFoundError
from refahi.utils import utc_now


@dataclass(frozen=True)
class GetReservationDetailQuery(Query):
    reservation_id: int
    user_id: int
    is_admin: bool = False


class GetReservationDetailHandler(QueryHandler[GetReservationDetailQuery, ReservationDetail]):
    """Owners see their own reservations; administrators see all of them."""

    def __init__(
        self,
        reservation_repository: ReservationRepositoryProtocol,
        tour_repository: TourRepositoryProtocol,
    ) -> None:
        self.reservation_repository = reservation_repository
        self.tour_repository = tour_repository

    def handle(self, query: GetReservationDetailQuery) -> ReservationDetail:
        reservation = self.reservation_repository.find_by_id(ReservationId(query.reservation_id))
        if reservation is None:
            raise ReservationNotFoundError(query.reservation_id)
        if not query.is_admin and not reservation.is_owned_by(UserId(query.user_id)):
            raise ForbiddenError("You do not have access to this reservation")

        now = utc_now()
        tour = self.tour_repository.find_by_id(reservation.tour_id)
        return ReservationDetail(
            reservation=reservation,
            tour_title=tour.title if tour else None,
            is_expired=reservation.is_expired(now),
            remaining_hold_seconds=reservation.remaining_hold_seconds(now),
        )
