"""Builds the price snapshots a reservation is held with."""

from datetime import datetime

from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import Money
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.entities.tour_reservation import (
    ReservationPriceSnapshot,
    TourReservation,
    calculate_total,
)


class ReservationPricingService:
    """Freezes the tour's current pricing for each participant type on a reservation."""

    def build_snapshots(
        self, tour: Tour, reservation: TourReservation, now: datetime
    ) -> list[ReservationPriceSnapshot]:
        snapshots: list[ReservationPriceSnapshot] = []
        for participant_type in sorted(reservation.participant_types()):
            pricing = tour.get_pricing(participant_type, now)
            if pricing is None:
                raise BusinessRuleViolationError(
                    "pricing_required",
                    f"No active pricing for participant type {participant_type}",
                )
            snapshots.append(
                ReservationPriceSnapshot(
                    participant_type=participant_type,
                    pricing_id=pricing.id.value,
                    base_price=pricing.price,
                    final_price=pricing.effective_price,
                    discount_percentage=pricing.discount_percentage,
                    snapshot_date=now,
                )
            )
        return snapshots

    def estimate_total(self, tour: Tour, reservation: TourReservation, now: datetime) -> Money:
        """Total the reservation would be held at right now."""
        return calculate_total(
            reservation.participants, self.build_snapshots(tour, reservation, now)
        )
