"""Checks shared by the reservation handlers."""

from datetime import datetime

import structlog

from refahi.application.membership.dtos import MemberInfo
from refahi.application.membership.protocols import MemberInfoProviderProtocol
from refahi.application.recreation.protocols import (
    ReservationRepositoryProtocol,
    TourRepositoryProtocol,
)
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import ReservationId, TourId, UserId
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.exceptions import (
    InsufficientCapacityError,
    NotEligibleError,
    RegistrationClosedError,
)
from refahi.exceptions import ForbiddenError, ReservationNotFoundError, TourNotFoundError

logger = structlog.get_logger(__name__)


class ReservationGuard:
    """Loads reservations and tours and enforces the rules every step repeats."""

    def __init__(
        self,
        tour_repository: TourRepositoryProtocol,
        reservation_repository: ReservationRepositoryProtocol,
        member_info_provider: MemberInfoProviderProtocol,
    ) -> None:
        self.tour_repository = tour_repository
        self.reservation_repository = reservation_repository
        self.member_info_provider = member_info_provider

    def load_tour(self, tour_id: int) -> Tour:
        tour = self.tour_repository.find_by_id(TourId(tour_id))
        if tour is None:
            raise TourNotFoundError(tour_id)
        return tour

    def load_owned_reservation(self, reservation_id: int, user_id: UserId) -> TourReservation:
        reservation = self.reservation_repository.find_by_id(ReservationId(reservation_id))
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        if not reservation.is_owned_by(user_id):
            raise ForbiddenError("You do not have access to this reservation")
        return reservation

    def ensure_registration_open(self, tour: Tour, now: datetime) -> None:
        if not tour.is_active or not tour.is_registration_open(now):
            raise RegistrationClosedError(tour.id.value)

    def ensure_member_eligible(self, tour: Tour, national_code: str) -> MemberInfo:
        """
        Check the tour's capability, feature and agency requirements.

        Raises:
            NotEligibleError: With every failed requirement
        """
        result = self.member_info_provider.validate_member_eligibility(
            national_code,
            required_capabilities=tour.required_capabilities or None,
            required_features=tour.required_features or None,
            required_agencies=tour.required_agencies or None,
        )
        if not result.is_eligible:
            raise NotEligibleError(result.errors)
        member = self.member_info_provider.get_member_info(national_code)
        if member is None:
            raise NotEligibleError(["Member not found"])
        return member

    def ensure_no_restricted_reservations(
        self, tour: Tour, national_code: str, now: datetime
    ) -> None:
        if not tour.restricted_tour_ids:
            return
        reservations = self.reservation_repository.find_by_tour_and_national_numbers(
            tour.restricted_tour_ids, [national_code]
        )
        active_tour_ids = sorted({r.tour_id.value for r in reservations if r.is_active(now)})
        if not active_tour_ids:
            return
        titles = [t.title for t in self.tour_repository.find_by_ids(active_tour_ids)]
        raise BusinessRuleViolationError(
            "restricted_tours",
            "You have an active reservation on a tour that excludes this one: "
            + ", ".join(titles),
        )

    def ensure_no_conflicting_participants(
        self, reservation: TourReservation, now: datetime
    ) -> None:
        """No participant may already travel on another active reservation of the tour."""
        national_numbers = [p.national_number.value for p in reservation.participants]
        others = self.reservation_repository.find_by_tour_and_national_numbers(
            [reservation.tour_id.value], national_numbers
        )
        for other in others:
            if other.id == reservation.id or not other.is_active(now):
                continue
            taken = sorted(
                p.national_number.value
                for p in other.participants
                if p.national_number.value in national_numbers
            )
            raise BusinessRuleViolationError(
                "participant_already_reserved",
                "Participants already have an active reservation for this tour: "
                + ", ".join(taken),
            )

    def ensure_guest_limit(self, tour: Tour, guest_count: int) -> None:
        if guest_count > tour.max_guests_per_reservation:
            raise BusinessRuleViolationError(
                "guest_limit",
                f"At most {tour.max_guests_per_reservation} guests are allowed per reservation",
            )

    def ensure_seats_available(
        self, tour: Tour, reservation: TourReservation, now: datetime
    ) -> None:
        """
        Check the group fits in the remaining seats.

        Seats already held by the reservation itself are added back before
        comparing.
        """
        needed = reservation.participant_count
        own = needed if reservation.is_active(now) else 0

        if reservation.capacity_id is not None:
            capacity = tour.get_capacity(reservation.capacity_id)
            if capacity is None:
                raise BusinessRuleViolationError(
                    "capacity_belongs_to_tour", "Selected capacity does not belong to this tour"
                )
            if not capacity.is_registration_open(now):
                raise BusinessRuleViolationError(
                    "capacity_open", "Registration for the selected capacity is not open"
                )
            if not capacity.accepts_group_size(needed):
                raise BusinessRuleViolationError(
                    "capacity_group_size",
                    f"Group size must be between {capacity.min_participants_per_reservation} "
                    f"and {capacity.max_participants_per_reservation}",
                )
            used = self.reservation_repository.get_capacity_utilization(capacity.id, now)
            remaining = capacity.max_participants - used + own
        else:
            used = self.reservation_repository.get_tour_utilization(tour.id, now)
            remaining = tour.max_participants - used + own

        if remaining < needed:
            logger.info(
                "insufficient_capacity",
                reservation_id=reservation.id.value,
                requested=needed,
                remaining=remaining,
            )
            raise InsufficientCapacityError(needed, max(remaining, 0))
