"""Pydantic schemas for tour and reservation API requests and responses."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from refahi.application.recreation.dtos import (
    CapacityAvailability,
    ReservationDetail,
    TourAvailability,
)
from refahi.domain.recreation.entities.tour import (
    DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION,
    MAX_GUESTS_LIMIT,
    MAX_TITLE_LENGTH,
    TourPricing,
)
from refahi.domain.recreation.entities.tour_reservation import (
    Participant,
    ReservationPriceSnapshot,
    TourReservation,
)
from refahi.domain.recreation.enums import ParticipantType, ReservationStatus, TourStatus
from refahi.infrastructure.common.schemas import SuccessResponse

# Requests


class CreateTourRequest(BaseModel):
    """Request schema for creating a draft tour."""

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = None
    tour_start: datetime
    tour_end: datetime
    min_age: int | None = Field(None, ge=0)
    max_age: int | None = Field(None, ge=0)
    max_guests_per_reservation: int = Field(0, ge=0, le=MAX_GUESTS_LIMIT)
    required_capabilities: list[str] = Field(default_factory=list)
    required_features: list[str] = Field(default_factory=list)
    required_agencies: list[int] = Field(default_factory=list)
    restricted_tour_ids: list[int] = Field(default_factory=list)


class AddCapacityRequest(BaseModel):
    max_participants: int = Field(..., gt=0)
    registration_start: datetime
    registration_end: datetime
    description: str | None = Field(None, max_length=500)
    min_participants_per_reservation: int = Field(1, ge=1)
    max_participants_per_reservation: int = Field(
        DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION, ge=1
    )
    is_active: bool = True


class AddPricingRequest(BaseModel):
    participant_type: ParticipantType
    price_rials: int = Field(..., gt=0)
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_default: bool = False
    discount_percentage: float = Field(0.0, ge=0, le=100)
    description: str | None = Field(None, max_length=500)


class StartReservationRequest(BaseModel):
    capacity_id: int


class GuestRequest(BaseModel):
    """A guest travelling on the reservation."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    national_number: str = Field(..., min_length=8, max_length=10)
    birth_date: date | None = None
    phone_number: str | None = None
    email: str | None = Field(None, max_length=200)
    emergency_contact_name: str | None = Field(None, max_length=200)
    emergency_contact_phone: str | None = Field(None, max_length=20)
    notes: str | None = Field(None, max_length=1000)


class ChangeCapacityRequest(BaseModel):
    capacity_id: int


class CancelReservationRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


# Tours


class CapacitySchema(BaseModel):
    id: int
    max_participants: int
    registration_start: datetime
    registration_end: datetime
    is_active: bool
    description: str | None
    min_participants_per_reservation: int
    max_participants_per_reservation: int
    utilization: int
    remaining: int
    is_registration_open: bool

    @classmethod
    def from_availability(cls, availability: CapacityAvailability) -> "CapacitySchema":
        capacity = availability.capacity
        return cls(
            id=capacity.id.value,
            max_participants=capacity.max_participants,
            registration_start=capacity.registration_start,
            registration_end=capacity.registration_end,
            is_active=capacity.is_active,
            description=capacity.description,
            min_participants_per_reservation=capacity.min_participants_per_reservation,
            max_participants_per_reservation=capacity.max_participants_per_reservation,
            utilization=availability.utilization,
            remaining=availability.remaining,
            is_registration_open=availability.is_registration_open,
        )


class PricingSchema(BaseModel):
    id: int
    participant_type: ParticipantType
    price_rials: int
    effective_price_rials: int
    valid_from: datetime | None
    valid_to: datetime | None
    is_active: bool
    is_default: bool
    discount_percentage: float
    description: str | None

    @classmethod
    def from_domain(cls, pricing: TourPricing) -> "PricingSchema":
        return cls(
            id=pricing.id.value,
            participant_type=pricing.participant_type,
            price_rials=pricing.price.amount_rials,
            effective_price_rials=pricing.effective_price.amount_rials,
            valid_from=pricing.valid_from,
            valid_to=pricing.valid_to,
            is_active=pricing.is_active,
            is_default=pricing.is_default,
            discount_percentage=pricing.discount_percentage,
            description=pricing.description,
        )


class TourSummarySchema(BaseModel):
    id: int
    title: str
    tour_start: datetime
    tour_end: datetime
    status: TourStatus
    is_active: bool
    is_registration_open: bool
    max_participants: int
    remaining_capacity: int

    @classmethod
    def from_availability(cls, availability: TourAvailability) -> "TourSummarySchema":
        tour = availability.tour
        return cls(
            id=tour.id.value,
            title=tour.title,
            tour_start=tour.tour_start,
            tour_end=tour.tour_end,
            status=tour.status,
            is_active=tour.is_active,
            is_registration_open=availability.is_registration_open,
            max_participants=tour.max_participants,
            remaining_capacity=availability.remaining,
        )


class TourDetailSchema(TourSummarySchema):
    description: str | None
    min_age: int | None
    max_age: int | None
    max_guests_per_reservation: int
    required_capabilities: list[str]
    required_features: list[str]
    required_agencies: list[int]
    restricted_tour_ids: list[int]
    utilization: int
    capacities: list[CapacitySchema]
    pricing: list[PricingSchema]

    @classmethod
    def from_availability(cls, availability: TourAvailability) -> "TourDetailSchema":
        tour = availability.tour
        summary = TourSummarySchema.from_availability(availability)
        return cls(
            **summary.model_dump(),
            description=tour.description,
            min_age=tour.min_age,
            max_age=tour.max_age,
            max_guests_per_reservation=tour.max_guests_per_reservation,
            required_capabilities=tour.required_capabilities,
            required_features=tour.required_features,
            required_agencies=tour.required_agencies,
            restricted_tour_ids=tour.restricted_tour_ids,
            utilization=availability.utilization,
            capacities=[CapacitySchema.from_availability(c) for c in availability.capacities],
            pricing=[PricingSchema.from_domain(p) for p in tour.pricing],
        )


class TourResponse(SuccessResponse):
    tour_id: int
    status: TourStatus


# Reservations


class ParticipantSchema(BaseModel):
    id: int
    participant_type: ParticipantType
    first_name: str
    last_name: str
    national_number: str
    birth_date: date | None
    phone_number: str | None
    email: str | None
    is_main: bool
    registration_date: datetime | None

    @classmethod
    def from_domain(cls, participant: Participant) -> "ParticipantSchema":
        return cls(
            id=participant.id.value,
            participant_type=participant.participant_type,
            first_name=participant.first_name,
            last_name=participant.last_name,
            national_number=participant.national_number.value,
            birth_date=participant.birth_date,
            phone_number=participant.phone_number.value if participant.phone_number else None,
            email=participant.email,
            is_main=participant.is_main,
            registration_date=participant.registration_date,
        )


class PriceSnapshotSchema(BaseModel):
    participant_type: ParticipantType
    pricing_id: int
    base_price_rials: int
    final_price_rials: int
    discount_percentage: float
    snapshot_date: datetime

    @classmethod
    def from_domain(cls, snapshot: ReservationPriceSnapshot) -> "PriceSnapshotSchema":
        return cls(
            participant_type=snapshot.participant_type,
            pricing_id=snapshot.pricing_id,
            base_price_rials=snapshot.base_price.amount_rials,
            final_price_rials=snapshot.final_price.amount_rials,
            discount_percentage=snapshot.discount_percentage,
            snapshot_date=snapshot.snapshot_date,
        )


class ReservationSummarySchema(BaseModel):
    id: int
    tracking_code: str
    tour_id: int
    capacity_id: int | None
    status: ReservationStatus
    reservation_date: datetime
    expiry_date: datetime | None
    participant_count: int
    total_amount_rials: int
    paid_amount_rials: int
    bill_id: int | None

    @classmethod
    def from_domain(cls, reservation: TourReservation) -> "ReservationSummarySchema":
        return cls(
            id=reservation.id.value,
            tracking_code=reservation.tracking_code,
            tour_id=reservation.tour_id.value,
            capacity_id=reservation.capacity_id.value if reservation.capacity_id else None,
            status=reservation.status,
            reservation_date=reservation.reservation_date,
            expiry_date=reservation.expiry_date,
            participant_count=reservation.participant_count,
            total_amount_rials=reservation.total_amount.amount_rials,
            paid_amount_rials=reservation.paid_amount.amount_rials,
            bill_id=reservation.bill_id,
        )


class ReservationDetailSchema(ReservationSummarySchema):
    tour_title: str | None
    confirmation_date: datetime | None
    cancellation_date: datetime | None
    cancellation_reason: str | None
    notes: str | None
    is_expired: bool
    remaining_hold_seconds: int
    participants: list[ParticipantSchema]
    price_snapshots: list[PriceSnapshotSchema]

    @classmethod
    def from_detail(cls, detail: ReservationDetail) -> "ReservationDetailSchema":
        reservation = detail.reservation
        summary = ReservationSummarySchema.from_domain(reservation)
        return cls(
            **summary.model_dump(),
            tour_title=detail.tour_title,
            confirmation_date=reservation.confirmation_date,
            cancellation_date=reservation.cancellation_date,
            cancellation_reason=reservation.cancellation_reason,
            notes=reservation.notes,
            is_expired=detail.is_expired,
            remaining_hold_seconds=detail.remaining_hold_seconds,
            participants=[ParticipantSchema.from_domain(p) for p in reservation.participants],
            price_snapshots=[
                PriceSnapshotSchema.from_domain(s) for s in reservation.price_snapshots
            ],
        )


class ReservationResponse(SuccessResponse):
    reservation: ReservationSummarySchema


class AddGuestResponse(SuccessResponse):
    participant: ParticipantSchema
    estimated_total_rials: int | None


class InitiatePaymentResponse(SuccessResponse):
    reservation_id: int
    tracking_code: str
    bill_id: int
    bill_number: str
    total_amount_rials: int
    payment_url: str
    expiry_date: datetime | None


class ExpireReservationsResponse(SuccessResponse):
    expired_count: int
    tracking_codes: list[str]
