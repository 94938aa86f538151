from datetime import datetime
from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import (
    ReservationId,
    TourCapacityId,
    TourId,
    UserId,
)
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus


class ReservationRepositoryProtocol(Protocol):
    def find_by_id(self, reservation_id: ReservationId) -> TourReservation | None: ...

    def find_by_tracking_code(self, tracking_code: str) -> TourReservation | None: ...

    def tracking_code_exists(self, tracking_code: str) -> bool: ...

    def find_by_tour_and_national_numbers(
        self, tour_ids: list[int], national_numbers: list[str]
    ) -> list[TourReservation]:
        """Reservations on any of the tours carrying any of the national numbers."""
        ...

    def find_by_user(
        self,
        user_id: UserId,
        pagination: Pagination,
        status: ReservationStatus | None = None,
    ) -> tuple[list[TourReservation], int]: ...

    def find_expired_holds(self, now: datetime) -> list[TourReservation]: ...

    def get_capacity_utilization(self, capacity_id: TourCapacityId, now: datetime) -> int: ...

    def get_tour_utilization(self, tour_id: TourId, now: datetime) -> int: ...

    def get_capacity_utilizations(self, tour_id: TourId, now: datetime) -> dict[int, int]: ...

    def save(self, reservation: TourReservation) -> TourReservation: ...
