from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.domain.common.value_objects import UserId
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus


@dataclass(frozen=True)
class GetUserReservationsQuery(Query):
    user_id: int
    pagination: Pagination = field(default_factory=Pagination)
    status: ReservationStatus | None = None


class GetUserReservationsHandler(
    QueryHandler[GetUserReservationsQuery, PaginatedResult[TourReservation]]
):
    def __init__(self, reservation_repository: ReservationRepositoryProtocol) -> None:
        self.reservation_repository = reservation_repository

    def handle(self, query: GetUserReservationsQuery) -> PaginatedResult[TourReservation]:
        items, total = self.reservation_repository.find_by_user(
            UserId(query.user_id), query.pagination, status=query.status
        )
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
