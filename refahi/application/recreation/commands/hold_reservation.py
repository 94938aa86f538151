"""Put a draft reservation on hold with frozen prices."""

from dataclasses import dataclass
from datetime import timedelta

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.config import Settings
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import UserId
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus
from refahi.domain.recreation.services.reservation_pricing_service import (
    ReservationPricingService,
)
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HoldReservationCommand(Command):
    reservation_id: int
    user_id: int


class HoldReservationHandler(CommandHandler[HoldReservationCommand, TourReservation]):
    """
    Reserve seats for a limited time while the owner pays.

    Every rule is checked against the current state of the tour and of the
    other reservations; seats are only counted once the hold is saved.
    """

    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        pricing_service: ReservationPricingService,
        uow: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.pricing_service = pricing_service
        self.uow = uow
        self.settings = settings

    def handle(self, command: HoldReservationCommand) -> TourReservation:
        now = utc_now()
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        if not reservation.can_transition_to(ReservationStatus.ON_HOLD):
            raise BusinessRuleViolationError(
                "hold_requires_draft",
                f"Reservation in status {reservation.status} cannot be put on hold",
            )

        tour = self.guard.load_tour(reservation.tour_id.value)
        self.guard.ensure_registration_open(tour, now)

        if tour.tour_start - now < timedelta(hours=self.settings.MINIMUM_HOURS_BEFORE_TOUR):
            raise BusinessRuleViolationError(
                "minimum_time_before_tour",
                f"Reservations must be held at least "
                f"{self.settings.MINIMUM_HOURS_BEFORE_TOUR} hours before the tour starts",
            )

        national_code = reservation.user_national_code.value
        self.guard.ensure_member_eligible(tour, national_code)
        self.guard.ensure_no_restricted_reservations(tour, national_code, now)
        self.guard.ensure_no_conflicting_participants(reservation, now)

        if not reservation.participants:
            raise BusinessRuleViolationError(
                "hold_requires_participants", "Reservation has no participants"
            )
        self.guard.ensure_guest_limit(tour, reservation.guest_count)
        self.guard.ensure_seats_available(tour, reservation, now)

        snapshots = self.pricing_service.build_snapshots(tour, reservation, now)
        expiry = now + timedelta(minutes=self.settings.RESERVATION_HOLD_MINUTES)

        with self.uow:
            reservation.hold(expiry, snapshots, now)
            self.uow.track(reservation)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "reservation_held",
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            expiry_date=expiry.isoformat(),
            total_amount=reservation.total_amount.amount_rials,
        )
        return reservation
