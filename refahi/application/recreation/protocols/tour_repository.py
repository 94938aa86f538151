from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import TourId
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.enums import TourStatus


class TourRepositoryProtocol(Protocol):
    def find_by_id(self, tour_id: TourId) -> Tour | None: ...

    def find_by_ids(self, tour_ids: list[int]) -> list[Tour]: ...

    def find_active(
        self, pagination: Pagination, status: TourStatus | None = None
    ) -> tuple[list[Tour], int]: ...

    def save(self, tour: Tour) -> Tour: ...
