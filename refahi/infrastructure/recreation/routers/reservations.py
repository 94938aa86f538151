"""API routes for the tour reservation lifecycle."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.recreation.commands.add_guest import (
    AddGuestCommand,
    AddGuestHandler,
    GuestData,
)
from refahi.application.recreation.commands.cancel_reservation import (
    CancelReservationCommand,
    CancelReservationHandler,
)
from refahi.application.recreation.commands.change_reservation_capacity import (
    ChangeReservationCapacityCommand,
    ChangeReservationCapacityHandler,
)
from refahi.application.recreation.commands.expire_reservations import (
    ExpireReservationsCommand,
    ExpireReservationsHandler,
)
from refahi.application.recreation.commands.hold_reservation import (
    HoldReservationCommand,
    HoldReservationHandler,
)
from refahi.application.recreation.commands.initiate_payment import (
    InitiatePaymentCommand,
    InitiatePaymentHandler,
)
from refahi.application.recreation.commands.reactivate_expired_reservation import (
    ReactivateExpiredReservationCommand,
    ReactivateExpiredReservationHandler,
)
from refahi.application.recreation.commands.remove_guest import (
    RemoveGuestCommand,
    RemoveGuestHandler,
)
from refahi.application.recreation.commands.start_reservation import (
    StartReservationCommand,
    StartReservationHandler,
)
from refahi.application.recreation.queries.get_reservation_detail import (
    GetReservationDetailHandler,
    GetReservationDetailQuery,
)
from refahi.application.recreation.queries.get_user_reservations import (
    GetUserReservationsHandler,
    GetUserReservationsQuery,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.domain.recreation.entities.tour_reservation import TourReservation
from refahi.domain.recreation.enums import ReservationStatus
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser
from refahi.infrastructure.recreation.schemas import (
    AddGuestResponse,
    CancelReservationRequest,
    ChangeCapacityRequest,
    ExpireReservationsResponse,
    GuestRequest,
    InitiatePaymentResponse,
    ParticipantSchema,
    ReservationDetailSchema,
    ReservationResponse,
    ReservationSummarySchema,
    StartReservationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reservations"])

_UNEXPECTED = "An unexpected error occurred. Please try again later."


def _reservation_response(reservation: TourReservation, message: str) -> ReservationResponse:
    return ReservationResponse(
        success=True,
        message=message,
        reservation=ReservationSummarySchema.from_domain(reservation),
    )


@router.post(
    "/tours/{tour_id}/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_reservation(
    tour_id: int,
    request: StartReservationRequest,
    current_user: CurrentUser,
    handler: StartReservationHandler = Depends(
        inject_handler(container.start_reservation_handler)
    ),
) -> ReservationResponse:
    """
    Start a draft reservation with the current user as main participant.

    Raises:
        HTTPException 409: If registration is closed or the user is not eligible
        HTTPException 409: If the user already has a pending reservation
    """
    try:
        reservation = handler.handle(
            StartReservationCommand(
                tour_id=tour_id,
                capacity_id=request.capacity_id,
                user_id=current_user.id.value,
                national_code=current_user.national_code.value,
            )
        )
        return _reservation_response(reservation, "Reservation started")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to start reservation for tour {tour_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post(
    "/reservations/{reservation_id}/guests",
    response_model=AddGuestResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_guest(
    reservation_id: int,
    request: GuestRequest,
    current_user: CurrentUser,
    handler: AddGuestHandler = Depends(inject_handler(container.add_guest_handler)),
) -> AddGuestResponse:
    try:
        result = handler.handle(
            AddGuestCommand(
                reservation_id=reservation_id,
                user_id=current_user.id.value,
                guest=GuestData(**request.model_dump()),
            )
        )
        return AddGuestResponse(
            success=True,
            message="Guest added",
            participant=ParticipantSchema.from_domain(result.participant),
            estimated_total_rials=(
                result.estimated_total.amount_rials if result.estimated_total else None
            ),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to add guest to reservation {reservation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.delete(
    "/reservations/{reservation_id}/guests/{participant_id}",
    response_model=ReservationResponse,
)
def remove_guest(
    reservation_id: int,
    participant_id: int,
    current_user: CurrentUser,
    handler: RemoveGuestHandler = Depends(inject_handler(container.remove_guest_handler)),
) -> ReservationResponse:
    try:
        reservation = handler.handle(
            RemoveGuestCommand(
                reservation_id=reservation_id,
                participant_id=participant_id,
                user_id=current_user.id.value,
            )
        )
        return _reservation_response(reservation, "Guest removed")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to remove guest {participant_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.put("/reservations/{reservation_id}/capacity", response_model=ReservationResponse)
def change_reservation_capacity(
    reservation_id: int,
    request: ChangeCapacityRequest,
    current_user: CurrentUser,
    handler: ChangeReservationCapacityHandler = Depends(
        inject_handler(container.change_reservation_capacity_handler)
    ),
) -> ReservationResponse:
    try:
        reservation = handler.handle(
            ChangeReservationCapacityCommand(
                reservation_id=reservation_id,
                capacity_id=request.capacity_id,
                user_id=current_user.id.value,
            )
        )
        return _reservation_response(reservation, "Reservation capacity changed")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to change capacity of {reservation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post("/reservations/{reservation_id}/hold", response_model=ReservationResponse)
def hold_reservation(
    reservation_id: int,
    current_user: CurrentUser,
    handler: HoldReservationHandler = Depends(inject_handler(container.hold_reservation_handler)),
) -> ReservationResponse:
    """
    Reserve seats for the draft and snapshot its prices.

    The hold expires after the configured number of minutes unless paid.
    """
    try:
        reservation = handler.handle(
            HoldReservationCommand(reservation_id=reservation_id, user_id=current_user.id.value)
        )
        return _reservation_response(reservation, "Reservation is on hold")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to hold reservation {reservation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post("/reservations/{reservation_id}/pay", response_model=InitiatePaymentResponse)
def initiate_payment(
    reservation_id: int,
    current_user: CurrentUser,
    handler: InitiatePaymentHandler = Depends(inject_handler(container.initiate_payment_handler)),
) -> InitiatePaymentResponse:
    """Issue (or reuse) the reservation bill and return its payment link."""
    try:
        result = handler.handle(
            InitiatePaymentCommand(reservation_id=reservation_id, user_id=current_user.id.value)
        )
        return InitiatePaymentResponse(
            success=True,
            message="Payment initiated",
            reservation_id=result.reservation_id,
            tracking_code=result.tracking_code,
            bill_id=result.bill_id,
            bill_number=result.bill_number,
            total_amount_rials=result.total_amount,
            payment_url=result.payment_url,
            expiry_date=result.expiry_date,
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to initiate payment for {reservation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post("/reservations/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: int,
    request: CancelReservationRequest,
    current_user: CurrentUser,
    handler: CancelReservationHandler = Depends(
        inject_handler(container.cancel_reservation_handler)
    ),
) -> ReservationResponse:
    try:
        reservation = handler.handle(
            CancelReservationCommand(
                reservation_id=reservation_id,
                user_id=current_user.id.value,
                reason=request.reason,
            )
        )
        return _reservation_response(reservation, "Reservation cancelled")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to cancel reservation {reservation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post("/reservations/{reservation_id}/reactivate", response_model=ReservationResponse)
def reactivate_expired_reservation(
    reservation_id: int,
    current_user: CurrentUser,
    handler: ReactivateExpiredReservationHandler = Depends(
        inject_handler(container.reactivate_expired_reservation_handler)
    ),
) -> ReservationResponse:
    try:
        reservation = handler.handle(
            ReactivateExpiredReservationCommand(
                reservation_id=reservation_id, user_id=current_user.id.value
            )
        )
        return _reservation_response(reservation, "Reservation reactivated")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to reactivate reservation {reservation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post("/reservations/expire", response_model=ExpireReservationsResponse)
def expire_reservations(
    _: CurrentAdmin,
    handler: ExpireReservationsHandler = Depends(
        inject_handler(container.expire_reservations_handler)
    ),
) -> ExpireReservationsResponse:
    """Expire every hold whose expiry has passed."""
    result = handler.handle(ExpireReservationsCommand())
    return ExpireReservationsResponse(
        success=True,
        message=f"{result.expired_count} reservation(s) expired",
        expired_count=result.expired_count,
        tracking_codes=result.tracking_codes,
    )


@router.get("/reservations/me", response_model=PaginatedResponse[ReservationSummarySchema])
def get_my_reservations(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    reservation_status: ReservationStatus | None = Query(None, alias="status"),
    handler: GetUserReservationsHandler = Depends(
        inject_handler(container.get_user_reservations_handler)
    ),
) -> PaginatedResponse[ReservationSummarySchema]:
    result = handler.handle(
        GetUserReservationsQuery(
            user_id=current_user.id.value,
            pagination=Pagination(page=page, page_size=page_size),
            status=reservation_status,
        )
    )
    return PaginatedResponse.from_result(
        result, [ReservationSummarySchema.from_domain(r) for r in result.items]
    )


@router.get("/reservations/{reservation_id}", response_model=ReservationDetailSchema)
def get_reservation(
    reservation_id: int,
    current_user: CurrentUser,
    handler: GetReservationDetailHandler = Depends(
        inject_handler(container.get_reservation_detail_handler)
    ),
) -> ReservationDetailSchema:
    """Return a reservation owned by the user; administrators can read any."""
    detail = handler.handle(
        GetReservationDetailQuery(
            reservation_id=reservation_id,
            user_id=current_user.id.value,
            is_admin=current_user.is_admin,
        )
    )
    return ReservationDetailSchema.from_detail(detail)
