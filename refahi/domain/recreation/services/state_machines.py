"""Transition tables for tours and reservations."""

from refahi.domain.common.state_machine import StateMachine
from refahi.domain.recreation.enums import ReservationStatus, TourStatus

TourStateMachine = StateMachine[TourStatus](
    "tour",
    {
        TourStatus.DRAFT: {
            TourStatus.SCHEDULED,
            TourStatus.REGISTRATION_OPEN,
            TourStatus.CANCELLED,
        },
        TourStatus.SCHEDULED: {
            TourStatus.REGISTRATION_OPEN,
            TourStatus.POSTPONED,
            TourStatus.CANCELLED,
        },
        TourStatus.REGISTRATION_OPEN: {
            TourStatus.REGISTRATION_CLOSED,
            TourStatus.POSTPONED,
            TourStatus.SUSPENDED,
            TourStatus.CANCELLED,
        },
        TourStatus.REGISTRATION_CLOSED: {
            TourStatus.REGISTRATION_OPEN,
            TourStatus.IN_PROGRESS,
            TourStatus.POSTPONED,
            TourStatus.CANCELLED,
        },
        TourStatus.IN_PROGRESS: {TourStatus.COMPLETED, TourStatus.SUSPENDED},
        TourStatus.POSTPONED: {
            TourStatus.SCHEDULED,
            TourStatus.REGISTRATION_OPEN,
            TourStatus.CANCELLED,
        },
        TourStatus.SUSPENDED: {
            TourStatus.REGISTRATION_OPEN,
            TourStatus.IN_PROGRESS,
            TourStatus.CANCELLED,
        },
        TourStatus.COMPLETED: {TourStatus.ARCHIVED},
        TourStatus.CANCELLED: {TourStatus.ARCHIVED},
    },
)

ReservationStateMachine = StateMachine[ReservationStatus](
    "reservation",
    {
        ReservationStatus.DRAFT: {ReservationStatus.ON_HOLD, ReservationStatus.CANCELLED},
        ReservationStatus.ON_HOLD: {
            ReservationStatus.PAYING,
            ReservationStatus.CONFIRMED,
            ReservationStatus.CANCELLED,
            ReservationStatus.EXPIRED,
            ReservationStatus.SYSTEM_CANCELLED,
        },
        ReservationStatus.PAYING: {
            ReservationStatus.CONFIRMED,
            ReservationStatus.PAYMENT_FAILED,
            ReservationStatus.CANCELLED,
            ReservationStatus.SYSTEM_CANCELLED,
        },
        ReservationStatus.CONFIRMED: {
            ReservationStatus.CANCELLED,
            ReservationStatus.SYSTEM_CANCELLED,
            ReservationStatus.REFUNDING,
        },
        ReservationStatus.PAYMENT_FAILED: {
            ReservationStatus.PAYING,
            ReservationStatus.CANCELLED,
            ReservationStatus.EXPIRED,
        },
        ReservationStatus.REFUNDING: {ReservationStatus.REFUNDED},
        # Reactivation of an expired hold
        ReservationStatus.EXPIRED: {ReservationStatus.ON_HOLD, ReservationStatus.CANCELLED},
    },
)
