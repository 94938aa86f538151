from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler
from refahi.application.recreation.dtos import TourAvailability
from refahi.application.recreation.protocols import (
    ReservationRepositoryProtocol,
    TourRepositoryProtocol,
)
from refahi.application.recreation.queries.get_tours import build_availability
from refahi.domain.common.value_objects import TourId
from refahi.exceptions import TourNotFoundError
from refahi.utils import utc_now


@dataclass(frozen=True)
class GetTourDetailQuery(Query):
    tour_id: int


class GetTourDetailHandler(QueryHandler[GetTourDetailQuery, TourAvailability]):
    def __init__(
        self,
        tour_repository: TourRepositoryProtocol,
        reservation_repository: ReservationRepositoryProtocol,
    ) -> None:
        self.tour_repository = tour_repository
        self.reservation_repository = reservation_repository

    def handle(self, query: GetTourDetailQuery) -> TourAvailability:
        tour = self.tour_repository.find_by_id(TourId(query.tour_id))
        if tour is None:
            raise TourNotFoundError(query.tour_id)
        return build_availability(tour, self.reservation_repository, utc_now())
