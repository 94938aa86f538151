"""Add a guest to a draft reservation."""

from dataclasses import dataclass
from datetime import date, datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.membership.protocols import MemberInfoProviderProtocol
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import Money, NationalId, PhoneNumber, UserId
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.entities.tour_reservation import Participant, TourReservation
from refahi.domain.recreation.enums import ParticipantType, ReservationStatus
from refahi.domain.recreation.services.reservation_pricing_service import (
    ReservationPricingService,
)
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GuestData:
    first_name: str
    last_name: str
    national_number: str
    birth_date: date | None = None
    phone_number: str | None = None
    email: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AddGuestCommand(Command):
    reservation_id: int
    user_id: int
    guest: GuestData


@dataclass(frozen=True)
class AddGuestResult:
    reservation: TourReservation
    participant: Participant
    estimated_total: Money | None


class AddGuestHandler(CommandHandler[AddGuestCommand, AddGuestResult]):
    def __init__(
        self,
        guard: ReservationGuard,
        reservation_repository: ReservationRepositoryProtocol,
        member_info_provider: MemberInfoProviderProtocol,
        pricing_service: ReservationPricingService,
        uow: UnitOfWork,
    ) -> None:
        self.guard = guard
        self.reservation_repository = reservation_repository
        self.member_info_provider = member_info_provider
        self.pricing_service = pricing_service
        self.uow = uow

    def handle(self, command: AddGuestCommand) -> AddGuestResult:
        now = utc_now()
        guest = command.guest
        reservation = self.guard.load_owned_reservation(
            command.reservation_id, UserId(command.user_id)
        )
        if reservation.status != ReservationStatus.DRAFT:
            raise BusinessRuleViolationError(
                "participants_only_in_draft", "Guests can only be added to a draft reservation"
            )
        tour = self.guard.load_tour(reservation.tour_id.value)
        self.guard.ensure_guest_limit(tour, reservation.guest_count + 1)

        if guest.birth_date is not None and not tour.is_age_allowed(guest.birth_date):
            raise BusinessRuleViolationError(
                "age_limit", "Guest age is outside the limits of this tour"
            )

        national_number = NationalId(guest.national_number)
        guest_member = self.member_info_provider.get_member_info(national_number.value)
        participant_type = (
            ParticipantType.MEMBER
            if guest_member is not None and guest_member.has_active_membership
            else ParticipantType.GUEST
        )

        with self.uow:
            participant = Participant.create(
                participant_type=participant_type,
                first_name=guest.first_name,
                last_name=guest.last_name,
                national_number=national_number,
                birth_date=guest.birth_date,
                phone_number=PhoneNumber(guest.phone_number) if guest.phone_number else None,
                email=guest.email,
                emergency_contact_name=guest.emergency_contact_name,
                emergency_contact_phone=guest.emergency_contact_phone,
                notes=guest.notes,
            )
            reservation.add_participant(participant, now)
            reservation = self.reservation_repository.save(reservation)
            self.uow.commit()

        saved = next(
            p for p in reservation.participants if p.national_number == national_number
        )
        estimated_total = self._estimate(tour, reservation, now)
        logger.info(
            "guest_added",
            reservation_id=reservation.id.value,
            participant_id=saved.id.value,
            participant_type=participant_type.value,
        )
        return AddGuestResult(
            reservation=reservation, participant=saved, estimated_total=estimated_total
        )

    def _estimate(
        self, tour: Tour, reservation: TourReservation, now: datetime
    ) -> Money | None:
        """Estimated total, or None while a participant type has no pricing."""
        try:
            return self.pricing_service.estimate_total(tour, reservation, now)
        except BusinessRuleViolationError:
            return None
