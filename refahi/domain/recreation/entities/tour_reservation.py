"""Tour reservation aggregate and its participants."""

import random
from dataclasses import dataclass, field
from datetime import date, datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.entity import Entity
from refahi.domain.common.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)
from refahi.domain.common.integration_events import (
    ReservationCancelled,
    ReservationConfirmed,
    ReservationExpired,
    ReservationHeld,
)
from refahi.domain.common.value_object import ValueObject
from refahi.domain.common.value_objects import (
    MemberId,
    Money,
    NationalId,
    ParticipantId,
    PhoneNumber,
    ReservationId,
    TourCapacityId,
    TourId,
    UserId,
)
from refahi.domain.recreation.enums import ParticipantType, ReservationStatus
from refahi.domain.recreation.services.state_machines import ReservationStateMachine

MAX_TRACKING_CODE_LENGTH = 50
MAX_NOTES_LENGTH = 2000


def generate_tracking_code(now: datetime, rng: random.Random | None = None) -> str:
    """Tracking codes look like ``RSV-20250101120000-123``."""
    suffix = (rng or random).randint(100, 999)
    return f"RSV-{now:%Y%m%d%H%M%S}-{suffix}".upper()


@dataclass
class Participant(Entity[ParticipantId]):
    """
    A person travelling on a reservation.

    Business Rules:
    - First and last name are required
    - National number is a valid national code
    """

    id: ParticipantId
    participant_type: ParticipantType
    first_name: str
    last_name: str
    national_number: NationalId
    birth_date: date | None = None
    phone_number: PhoneNumber | None = None
    email: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    notes: str | None = None
    is_main: bool = False
    registration_date: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("First name cannot be empty", field="first_name")
        if not self.last_name or not self.last_name.strip():
            raise ValidationError("Last name cannot be empty", field="last_name")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def create(
        cls,
        participant_type: ParticipantType,
        first_name: str,
        last_name: str,
        national_number: NationalId,
        birth_date: date | None = None,
        phone_number: PhoneNumber | None = None,
        email: str | None = None,
        emergency_contact_name: str | None = None,
        emergency_contact_phone: str | None = None,
        notes: str | None = None,
        is_main: bool = False,
    ) -> "Participant":
        return cls(
            id=ParticipantId.generate(),
            participant_type=participant_type,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            national_number=national_number,
            birth_date=birth_date,
            phone_number=phone_number,
            email=email,
            emergency_contact_name=emergency_contact_name,
            emergency_contact_phone=emergency_contact_phone,
            notes=notes,
            is_main=is_main,
        )


@dataclass(frozen=True)
class ReservationPriceSnapshot(ValueObject):
    """Price of one participant type frozen at the time the reservation was held."""

    participant_type: ParticipantType
    pricing_id: int
    base_price: Money
    final_price: Money
    discount_percentage: float
    snapshot_date: datetime


def calculate_total(
    participants: list[Participant], snapshots: list[ReservationPriceSnapshot]
) -> Money:
    """Sum of the snapshot final price of each participant type times its head count."""
    by_type = {snapshot.participant_type: snapshot for snapshot in snapshots}
    total = Money.zero()
    for participant_type in ParticipantType:
        count = sum(1 for p in participants if p.participant_type == participant_type)
        if count == 0:
            continue
        snapshot = by_type.get(participant_type)
        if snapshot is None:
            raise ValidationError(
                f"No price snapshot for participant type {participant_type}",
                field="price_snapshots",
            )
        total = total + snapshot.final_price.multiply(count)
    return total


@dataclass
class TourReservation(AggregateRoot[ReservationId]):
    """
    A member's reservation of seats on a tour.

    A reservation starts as a Draft owned by one user, is put OnHold for a
    limited time while it is paid, and then ends up Confirmed, Expired or
    Cancelled. Seats only count against capacity while the reservation is
    active.

    Business Rules:
    - Participants can only be added while in Draft
    - National numbers are unique within a reservation
    - The main participant cannot be removed
    - A hold needs at least one participant and an expiry in the future
    - Cancelling while OnHold is refused (a payment may be in progress)
    - Status changes follow ReservationStateMachine
    """

    id: ReservationId
    tour_id: TourId
    tracking_code: str
    user_id: UserId
    user_national_code: NationalId
    reservation_date: datetime
    member_id: MemberId | None = None
    capacity_id: TourCapacityId | None = None
    status: ReservationStatus = ReservationStatus.DRAFT
    expiry_date: datetime | None = None
    confirmation_date: datetime | None = None
    cancellation_date: datetime | None = None
    cancellation_reason: str | None = None
    total_amount: Money = field(default_factory=Money.zero)
    paid_amount: Money = field(default_factory=Money.zero)
    bill_id: int | None = None
    notes: str | None = None
    participants: list[Participant] = field(default_factory=list)
    price_snapshots: list[ReservationPriceSnapshot] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.tracking_code or not self.tracking_code.strip():
            raise ValidationError("Tracking code cannot be empty", field="tracking_code")
        if len(self.tracking_code) > MAX_TRACKING_CODE_LENGTH:
            raise ValidationError(
                f"Tracking code cannot exceed {MAX_TRACKING_CODE_LENGTH} characters",
                field="tracking_code",
            )

    # Queries

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    @property
    def guest_count(self) -> int:
        return sum(1 for p in self.participants if not p.is_main)

    @property
    def member_count(self) -> int:
        return sum(1 for p in self.participants if p.participant_type == ParticipantType.MEMBER)

    @property
    def main_participant(self) -> Participant | None:
        return next((p for p in self.participants if p.is_main), None)

    def participant_types(self) -> set[ParticipantType]:
        return {p.participant_type for p in self.participants}

    def can_transition_to(self, target: ReservationStatus) -> bool:
        return ReservationStateMachine.can_transition(self.status, target)

    def is_expired(self, now: datetime) -> bool:
        if self.status == ReservationStatus.EXPIRED:
            return True
        return (
            self.status == ReservationStatus.ON_HOLD
            and self.expiry_date is not None
            and self.expiry_date <= now
        )

    def is_active(self, now: datetime) -> bool:
        """Whether the reservation currently holds seats."""
        if self.status in (ReservationStatus.CONFIRMED, ReservationStatus.PAYING):
            return True
        return self.status == ReservationStatus.ON_HOLD and not self.is_expired(now)

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id

    def remaining_hold_seconds(self, now: datetime) -> int:
        if self.status != ReservationStatus.ON_HOLD or self.expiry_date is None:
            return 0
        return max(0, int((self.expiry_date - now).total_seconds()))

    def has_participant(self, national_number: NationalId) -> bool:
        return any(p.national_number == national_number for p in self.participants)

    # Commands

    def _transition(self, target: ReservationStatus) -> ReservationStatus:
        previous = self.status
        ReservationStateMachine.ensure_can_transition(self.status, target)
        self.status = target
        return previous

    def _append_note(self, note: str) -> None:
        notes = f"{self.notes}\n{note}" if self.notes else note
        self.notes = notes[-MAX_NOTES_LENGTH:]

    def add_participant(self, participant: Participant, now: datetime | None = None) -> None:
        if self.status != ReservationStatus.DRAFT:
            raise BusinessRuleViolationError(
                "participants_only_in_draft",
                "Participants can only be added to a draft reservation",
            )
        if self.has_participant(participant.national_number):
            raise BusinessRuleViolationError(
                "unique_participant",
                f"Participant with national number {participant.national_number} "
                "is already on this reservation",
            )
        if participant.is_main and self.main_participant is not None:
            raise BusinessRuleViolationError(
                "single_main_participant", "Reservation already has a main participant"
            )
        participant.registration_date = participant.registration_date or now
        self.participants.append(participant)

    def remove_participant(self, participant_id: ParticipantId) -> Participant:
        if self.status not in (ReservationStatus.DRAFT, ReservationStatus.ON_HOLD):
            raise BusinessRuleViolationError(
                "participants_locked",
                f"Participants cannot be removed from a reservation in status {self.status}",
            )
        participant = next((p for p in self.participants if p.id == participant_id), None)
        if participant is None:
            raise EntityNotFoundError("Participant", participant_id.value)
        if participant.is_main:
            raise BusinessRuleViolationError(
                "main_participant_required", "The main participant cannot be removed"
            )
        self.participants.remove(participant)
        if self.status == ReservationStatus.ON_HOLD:
            self.total_amount = calculate_total(self.participants, self.price_snapshots)
        return participant

    def change_capacity(self, capacity_id: TourCapacityId) -> None:
        if self.status != ReservationStatus.DRAFT:
            raise BusinessRuleViolationError(
                "capacity_only_in_draft", "Capacity can only be changed on a draft reservation"
            )
        self.capacity_id = capacity_id

    def hold(
        self,
        expiry_date: datetime,
        price_snapshots: list[ReservationPriceSnapshot],
        now: datetime,
    ) -> None:
        """
        Put the reservation on hold until ``expiry_date`` with frozen prices.

        Raises:
            BusinessRuleViolationError: If the reservation is not a draft or has no participants
            ValidationError: If the expiry is not in the future or a price is missing
        """
        if self.status != ReservationStatus.DRAFT:
            raise BusinessRuleViolationError(
                "hold_requires_draft", "Only a draft reservation can be put on hold"
            )
        if not self.participants:
            raise BusinessRuleViolationError(
                "hold_requires_participants", "Reservation has no participants"
            )
        if expiry_date <= now:
            raise ValidationError("Hold expiry must be in the future", field="expiry_date")

        total = calculate_total(self.participants, price_snapshots)
        self._transition(ReservationStatus.ON_HOLD)
        self.expiry_date = expiry_date
        self.price_snapshots = list(price_snapshots)
        self.total_amount = total
        self._record_event(
            ReservationHeld(
                reservation_id=self.id.value,
                tracking_code=self.tracking_code,
                expiry_date=expiry_date,
                total_amount=total.amount_rials,
            )
        )

    def set_bill(self, bill_id: int) -> None:
        if self.status != ReservationStatus.ON_HOLD:
            raise BusinessRuleViolationError(
                "bill_requires_hold", "A bill can only be attached to a reservation on hold"
            )
        self.bill_id = bill_id

    def confirm(self, paid_amount: Money, now: datetime, skip_expiry_check: bool = False) -> None:
        """
        Confirm after payment.

        ``skip_expiry_check`` is used when the payment itself arrived in time
        but is processed after the hold expiry passed.
        """
        if not self.can_transition_to(ReservationStatus.CONFIRMED):
            raise BusinessRuleViolationError(
                "confirm_not_allowed",
                f"Reservation in status {self.status} cannot be confirmed",
            )
        if (
            not skip_expiry_check
            and self.status == ReservationStatus.ON_HOLD
            and self.is_expired(now)
        ):
            raise BusinessRuleViolationError("hold_expired", "Reservation hold has expired")
        self._transition(ReservationStatus.CONFIRMED)
        self.expiry_date = None
        self.confirmation_date = now
        self.paid_amount = paid_amount
        self._record_event(
            ReservationConfirmed(
                reservation_id=self.id.value,
                tracking_code=self.tracking_code,
                bill_id=self.bill_id,
            )
        )

    def cancel(self, reason: str | None, now: datetime) -> bool:
        """
        Cancel on behalf of the owner.

        Returns:
            False if the reservation was already cancelled, True otherwise
        """
        if self.status == ReservationStatus.CANCELLED:
            return False
        if self.status == ReservationStatus.ON_HOLD:
            raise BusinessRuleViolationError(
                "cancel_during_payment",
                "Reservation is awaiting payment and cannot be cancelled",
            )
        self._cancel(ReservationStatus.CANCELLED, reason or "Cancelled by user", now)
        return True

    def system_cancel(self, reason: str, now: datetime) -> bool:
        """Cancel because of an external outcome such as a cancelled bill."""
        if self.status in (ReservationStatus.CANCELLED, ReservationStatus.SYSTEM_CANCELLED):
            return False
        self._cancel(ReservationStatus.SYSTEM_CANCELLED, reason, now)
        return True

    def _cancel(self, target: ReservationStatus, reason: str, now: datetime) -> None:
        previous = self._transition(target)
        self.expiry_date = None
        self.cancellation_date = now
        self.cancellation_reason = reason
        self._append_note(f"Cancelled: {reason}")
        self._record_event(
            ReservationCancelled(
                reservation_id=self.id.value,
                tracking_code=self.tracking_code,
                bill_id=self.bill_id,
                previous_status=previous.value,
                paid_amount=self.paid_amount.amount_rials,
                reason=reason,
                user_national_code=self.user_national_code.value,
            )
        )

    def mark_as_expired(self, now: datetime) -> None:
        if self.expiry_date is None or self.expiry_date >= now:
            raise BusinessRuleViolationError(
                "expiry_not_reached", "Reservation hold has not expired yet"
            )
        self._transition(ReservationStatus.EXPIRED)
        self._record_event(
            ReservationExpired(
                reservation_id=self.id.value,
                tracking_code=self.tracking_code,
                bill_id=self.bill_id,
            )
        )

    def reactivate(self, new_expiry: datetime, now: datetime) -> None:
        """Put an expired reservation back on hold with a fresh expiry."""
        if self.status != ReservationStatus.EXPIRED:
            raise BusinessRuleViolationError(
                "reactivate_requires_expired", "Only expired reservations can be reactivated"
            )
        if new_expiry <= now:
            raise ValidationError("Hold expiry must be in the future", field="expiry_date")
        self._transition(ReservationStatus.ON_HOLD)
        self.expiry_date = new_expiry
        self.bill_id = None

    @classmethod
    def start(
        cls,
        tour_id: TourId,
        tracking_code: str,
        user_id: UserId,
        user_national_code: NationalId,
        now: datetime,
        member_id: MemberId | None = None,
        capacity_id: TourCapacityId | None = None,
    ) -> "TourReservation":
        """Create a new draft reservation (ID will be 0 until persisted)."""
        return cls(
            id=ReservationId.generate(),
            tour_id=tour_id,
            tracking_code=tracking_code,
            user_id=user_id,
            user_national_code=user_national_code,
            reservation_date=now,
            member_id=member_id,
            capacity_id=capacity_id,
        )
