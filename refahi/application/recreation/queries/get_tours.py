from dataclasses import dataclass, field
from datetime import datetime

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.recreation.dtos import CapacityAvailability, TourAvailability
from refahi.application.recreation.protocols import (
    ReservationRepositoryProtocol,
    TourRepositoryProtocol,
)
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.enums import TourStatus
from refahi.utils import utc_now


def build_availability(
    tour: Tour, reservation_repository: ReservationRepositoryProtocol, now: datetime
) -> TourAvailability:
    utilizations = reservation_repository.get_capacity_utilizations(tour.id, now)
    return TourAvailability(
        tour=tour,
        is_registration_open=tour.is_registration_open(now),
        capacities=[
            CapacityAvailability(
                capacity=capacity,
                utilization=utilizations.get(capacity.id.value, 0),
                is_registration_open=capacity.is_registration_open(now),
            )
            for capacity in tour.capacities
        ],
    )


@dataclass(frozen=True)
class GetToursQuery(Query):
    pagination: Pagination = field(default_factory=Pagination)
    status: TourStatus | None = None


class GetToursHandler(QueryHandler[GetToursQuery, PaginatedResult[TourAvailability]]):
    def __init__(
        self,
        tour_repository: TourRepositoryProtocol,
        reservation_repository: ReservationRepositoryProtocol,
    ) -> None:
        self.tour_repository = tour_repository
        self.reservation_repository = reservation_repository

    def handle(self, query: GetToursQuery) -> PaginatedResult[TourAvailability]:
        now = utc_now()
        tours, total = self.tour_repository.find_active(query.pagination, status=query.status)
        items = [build_availability(tour, self.reservation_repository, now) for tour in tours]
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
