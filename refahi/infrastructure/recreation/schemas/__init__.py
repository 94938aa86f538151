from .recreation_schemas import (
    AddCapacityRequest,
    AddGuestResponse,
    AddPricingRequest,
    CancelReservationRequest,
    ChangeCapacityRequest,
    CreateTourRequest,
    ExpireReservationsResponse,
    GuestRequest,
    InitiatePaymentResponse,
    ParticipantSchema,
    ReservationDetailSchema,
    ReservationResponse,
    ReservationSummarySchema,
    StartReservationRequest,
    TourDetailSchema,
    TourResponse,
    TourSummarySchema,
)

__all__ = [
    "AddCapacityRequest",
    "AddGuestResponse",
    "AddPricingRequest",
    "CancelReservationRequest",
    "ChangeCapacityRequest",
    "CreateTourRequest",
    "ExpireReservationsResponse",
    "GuestRequest",
    "InitiatePaymentResponse",
    "ParticipantSchema",
    "ReservationDetailSchema",
    "ReservationResponse",
    "ReservationSummarySchema",
    "StartReservationRequest",
    "TourDetailSchema",
    "TourResponse",
    "TourSummarySchema",
]
