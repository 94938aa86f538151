"""Mapper for TourReservation ORM ↔ Domain conversion."""

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
from refahi.domain.recreation.entities.tour_reservation import (
    Participant,
    ReservationPriceSnapshot,
    TourReservation,
)
from refahi.domain.recreation.enums import ParticipantType, ReservationStatus
from refahi.infrastructure.common.collections import sync_collection
from refahi.models import ReservationParticipant as ParticipantORM
from refahi.models import ReservationPriceSnapshot as SnapshotORM
from refahi.models import TourReservation as TourReservationORM
from refahi.utils import ensure_utc, ensure_utc_or_none


class ReservationMapper:
    """Mapper for TourReservation ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: TourReservationORM) -> TourReservation:
        """Convert ORM model to domain entity."""
        return TourReservation(
            id=ReservationId(orm_model.id),
            tour_id=TourId(orm_model.tour_id),
            capacity_id=TourCapacityId(orm_model.capacity_id) if orm_model.capacity_id else None,
            tracking_code=orm_model.tracking_code,
            user_id=UserId(orm_model.user_id),
            user_national_code=NationalId(orm_model.user_national_code),
            member_id=MemberId(orm_model.member_id) if orm_model.member_id else None,
            status=ReservationStatus(orm_model.status),
            reservation_date=ensure_utc(orm_model.reservation_date),
            expiry_date=ensure_utc_or_none(orm_model.expiry_date),
            confirmation_date=ensure_utc_or_none(orm_model.confirmation_date),
            cancellation_date=ensure_utc_or_none(orm_model.cancellation_date),
            cancellation_reason=orm_model.cancellation_reason,
            total_amount=Money(orm_model.total_amount_rials),
            paid_amount=Money(orm_model.paid_amount_rials),
            bill_id=orm_model.bill_id,
            notes=orm_model.notes,
            participants=[self._participant_to_domain(p) for p in orm_model.participants],
            price_snapshots=[self._snapshot_to_domain(s) for s in orm_model.price_snapshots],
            created_at=ensure_utc_or_none(orm_model.created_at),
            updated_at=ensure_utc_or_none(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: TourReservation, orm_model: TourReservationORM | None = None
    ) -> TourReservationORM:
        """Convert domain entity to ORM model, including participants and snapshots."""
        orm_model = orm_model or TourReservationORM(tracking_code=domain_entity.tracking_code)
        orm_model.tour_id = domain_entity.tour_id.value
        orm_model.capacity_id = (
            domain_entity.capacity_id.value if domain_entity.capacity_id else None
        )
        orm_model.user_id = domain_entity.user_id.value
        orm_model.user_national_code = domain_entity.user_national_code.value
        orm_model.member_id = domain_entity.member_id.value if domain_entity.member_id else None
        orm_model.status = domain_entity.status.value
        orm_model.reservation_date = domain_entity.reservation_date
        orm_model.expiry_date = domain_entity.expiry_date
        orm_model.confirmation_date = domain_entity.confirmation_date
        orm_model.cancellation_date = domain_entity.cancellation_date
        orm_model.cancellation_reason = domain_entity.cancellation_reason
        orm_model.total_amount_rials = domain_entity.total_amount.amount_rials
        orm_model.paid_amount_rials = domain_entity.paid_amount.amount_rials
        orm_model.bill_id = domain_entity.bill_id
        orm_model.notes = domain_entity.notes
        orm_model.participants = sync_collection(
            orm_model.participants,
            domain_entity.participants,
            lambda _: ParticipantORM(),
            self._update_participant,
        )
        # Snapshots have no identity of their own; rewrite them when they change
        current = [self._snapshot_to_domain(s) for s in orm_model.price_snapshots]
        if current != domain_entity.price_snapshots:
            orm_model.price_snapshots = [
                self._snapshot_to_orm(s) for s in domain_entity.price_snapshots
            ]
        return orm_model

    @staticmethod
    def _participant_to_domain(orm_model: ParticipantORM) -> Participant:
        return Participant(
            id=ParticipantId(orm_model.id),
            participant_type=ParticipantType(orm_model.participant_type),
            first_name=orm_model.first_name,
            last_name=orm_model.last_name,
            national_number=NationalId(orm_model.national_number),
            birth_date=orm_model.birth_date,
            phone_number=PhoneNumber(orm_model.phone_number) if orm_model.phone_number else None,
            email=orm_model.email,
            emergency_contact_name=orm_model.emergency_contact_name,
            emergency_contact_phone=orm_model.emergency_contact_phone,
            notes=orm_model.notes,
            is_main=orm_model.is_main,
            registration_date=ensure_utc_or_none(orm_model.registration_date),
        )

    @staticmethod
    def _update_participant(participant: Participant, orm_model: ParticipantORM) -> None:
        orm_model.participant_type = participant.participant_type.value
        orm_model.first_name = participant.first_name
        orm_model.last_name = participant.last_name
        orm_model.national_number = participant.national_number.value
        orm_model.birth_date = participant.birth_date
        orm_model.phone_number = (
            participant.phone_number.value if participant.phone_number else None
        )
        orm_model.email = participant.email
        orm_model.emergency_contact_name = participant.emergency_contact_name
        orm_model.emergency_contact_phone = participant.emergency_contact_phone
        orm_model.notes = participant.notes
        orm_model.is_main = participant.is_main
        orm_model.registration_date = participant.registration_date

    @staticmethod
    def _snapshot_to_domain(orm_model: SnapshotORM) -> ReservationPriceSnapshot:
        return ReservationPriceSnapshot(
            participant_type=ParticipantType(orm_model.participant_type),
            pricing_id=orm_model.pricing_id,
            base_price=Money(orm_model.base_price_rials),
            final_price=Money(orm_model.final_price_rials),
            discount_percentage=orm_model.discount_percentage,
            snapshot_date=ensure_utc(orm_model.snapshot_date),
        )

    @staticmethod
    def _snapshot_to_orm(snapshot: ReservationPriceSnapshot) -> SnapshotORM:
        return SnapshotORM(
            participant_type=snapshot.participant_type.value,
            pricing_id=snapshot.pricing_id,
            base_price_rials=snapshot.base_price.amount_rials,
            final_price_rials=snapshot.final_price.amount_rials,
            discount_percentage=snapshot.discount_percentage,
            snapshot_date=snapshot.snapshot_date,
        )
