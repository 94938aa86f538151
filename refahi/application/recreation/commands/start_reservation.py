"""Start a draft reservation with the current member as main participant."""

from dataclasses import dataclass
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.membership.dtos import MemberInfo
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import (
    MemberId,
    NationalId,
    PhoneNumber,
    TourCapacityId,
    UserId,
)
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.entities.tour_reservation import (
    Participant,
    TourReservation,
    generate_tracking_code,
)
from refahi.domain.recreation.enums import ParticipantType, ReservationStatus
from refahi.exceptions import ServiceError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)

TRACKING_CODE_ATTEMPTS = 7


@dataclass(frozen=True)
class StartReservationCommand(Command):
    tour_id: int
    capacity_id: int
    user_id: int
    national_code: str


class StartReservationHandler(CommandHandler[StartReservationCommand, TourReservation]):
    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.uow = uow

    def handle(self, command: StartReservationCommand) -> TourReservation:
        now = utc_now()
        national_code = NationalId(command.national_code)

        tour = self.guard.load_tour(command.tour_id)
        self.guard.ensure_registration_open(tour, now)
        member = self.guard.ensure_member_eligible(tour, national_code.value)
        self.guard.ensure_no_restricted_reservations(tour, national_code.value, now)
        self._ensure_capacity_selectable(tour, TourCapacityId(command.capacity_id), now)
        self._ensure_no_pending_reservation(tour, national_code, now)

        with self.uow:
            reservation = TourReservation.start(
                tour_id=tour.id,
                tracking_code=self._unique_tracking_code(),
                user_id=UserId(command.user_id),
                user_national_code=national_code,
                now=now,
                member_id=MemberId(member.member_id),
                capacity_id=TourCapacityId(command.capacity_id),
            )
            reservation.add_participant(self._main_participant(member, national_code), now)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        logger.info(
            "reservation_started",
            reservation_id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            tour_id=tour.id.value,
        )
        return reservation

    def _ensure_capacity_selectable(
        self, tour: Tour, capacity_id: TourCapacityId, now: datetime
    ) -> None:
        capacity = tour.get_capacity(capacity_id)
        if capacity is None:
            raise BusinessRuleViolationError(
                "capacity_belongs_to_tour", "Selected capacity does not belong to this tour"
            )
        if not capacity.is_registration_open(now):
            raise BusinessRuleViolationError(
                "capacity_open", "Registration for the selected capacity is not open"
            )
        if not capacity.accepts_group_size(1):
            raise BusinessRuleViolationError(
                "capacity_group_size", "Selected capacity does not accept this group size"
            )

    def _ensure_no_pending_reservation(
        self, tour: Tour, national_code: NationalId, now: datetime
    ) -> None:
        existing = self.reservation_repository.find_by_tour_and_national_numbers(
            [tour.id.value], [national_code.value]
        )
        for reservation in existing:
            if reservation.user_national_code != national_code:
                continue
            if reservation.status == ReservationStatus.DRAFT or (
                reservation.status == ReservationStatus.ON_HOLD
                and not reservation.is_expired(now)
            ):
                raise BusinessRuleViolationError(
                    "single_pending_reservation",
                    "You already have a draft or pending reservation for this tour",
                )

    def _unique_tracking_code(self) -> str:
        for _ in range(TRACKING_CODE_ATTEMPTS):
            code = generate_tracking_code(utc_now())
            if not self.reservation_repository.tracking_code_exists(code):
                return code
        logger.error("tracking_code_exhausted", attempts=TRACKING_CODE_ATTEMPTS)
        raise ServiceError("Could not generate a unique tracking code")

    @staticmethod
    def _main_participant(member: MemberInfo, national_code: NationalId) -> Participant:
        participant_type = (
            ParticipantType.MEMBER if member.has_active_membership else ParticipantType.GUEST
        )
        return Participant.create(
            participant_type=participant_type,
            first_name=member.first_name,
            last_name=member.last_name,
            national_number=national_code,
            birth_date=member.birth_date,
            phone_number=PhoneNumber(member.phone_number) if member.phone_number else None,
            email=member.email,
            is_main=True,
        )
