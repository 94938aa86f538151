"""Read models returned by the recreation queries."""

from dataclasses import dataclass, field

from refahi.domain.recreation.entities.tour import Tour, TourCapacity
from refahi.domain.recreation.entities.tour_reservation import TourReservation


@dataclass(frozen=True)
class CapacityAvailability:
    capacity: TourCapacity
    utilization: int
    is_registration_open: bool

    @property
    def remaining(self) -> int:
        if not self.capacity.is_active:
            return 0
        return max(self.capacity.max_participants - self.utilization, 0)


@dataclass(frozen=True)
class TourAvailability:
    """A tour with its seat usage at the time of the query."""

    tour: Tour
    is_registration_open: bool
    capacities: list[CapacityAvailability] = field(default_factory=list)

    @property
    def utilization(self) -> int:
        return sum(c.utilization for c in self.capacities if c.capacity.is_active)

    @property
    def remaining(self) -> int:
        return sum(c.remaining for c in self.capacities)


@dataclass(frozen=True)
class ReservationDetail:
    reservation: TourReservation
    tour_title: str | None
    is_expired: bool
    remaining_hold_seconds: int
