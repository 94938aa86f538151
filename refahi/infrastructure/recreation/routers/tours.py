"""API routes for tours: administration and the public catalogue."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.recreation.commands.add_tour_capacity import (
    AddTourCapacityCommand,
    AddTourCapacityHandler,
)
from refahi.application.recreation.commands.add_tour_pricing import (
    AddTourPricingCommand,
    AddTourPricingHandler,
)
from refahi.application.recreation.commands.close_tour_registration import (
    CloseTourRegistrationCommand,
    CloseTourRegistrationHandler,
)
from refahi.application.recreation.commands.create_tour import (
    CreateTourCommand,
    CreateTourHandler,
)
from refahi.application.recreation.commands.publish_tour import (
    PublishTourCommand,
    PublishTourHandler,
)
from refahi.application.recreation.queries.get_tour_detail import (
    GetTourDetailHandler,
    GetTourDetailQuery,
)
from refahi.application.recreation.queries.get_tours import GetToursHandler, GetToursQuery
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.domain.recreation.entities.tour import Tour
from refahi.domain.recreation.enums import TourStatus
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.identity.dependencies import CurrentAdmin
from refahi.infrastructure.recreation.schemas import (
    AddCapacityRequest,
    AddPricingRequest,
    CreateTourRequest,
    TourDetailSchema,
    TourResponse,
    TourSummarySchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tours", tags=["tours"])


def _tour_response(tour: Tour, message: str) -> TourResponse:
    return TourResponse(success=True, message=message, tour_id=tour.id.value, status=tour.status)


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.post("", response_model=TourResponse, status_code=status.HTTP_201_CREATED)
def create_tour(
    request: CreateTourRequest,
    _: CurrentAdmin,
    handler: CreateTourHandler = Depends(inject_handler(container.create_tour_handler)),
) -> TourResponse:
    """Create a tour in Draft status."""
    try:
        tour = handler.handle(CreateTourCommand(**request.model_dump()))
        return _tour_response(tour, "Tour created successfully")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("create tour", e) from e


@router.post(
    "/{tour_id}/capacities", response_model=TourResponse, status_code=status.HTTP_201_CREATED
)
def add_tour_capacity(
    tour_id: int,
    request: AddCapacityRequest,
    _: CurrentAdmin,
    handler: AddTourCapacityHandler = Depends(
        inject_handler(container.add_tour_capacity_handler)
    ),
) -> TourResponse:
    """
    Add a capacity window to a tour.

    Raises:
        HTTPException 404: If the tour does not exist
        HTTPException 400: If the window overlaps an active capacity
    """
    try:
        tour = handler.handle(AddTourCapacityCommand(tour_id=tour_id, **request.model_dump()))
        return _tour_response(tour, "Capacity added successfully")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("add tour capacity", e) from e


@router.post(
    "/{tour_id}/pricing", response_model=TourResponse, status_code=status.HTTP_201_CREATED
)
def add_tour_pricing(
    tour_id: int,
    request: AddPricingRequest,
    _: CurrentAdmin,
    handler: AddTourPricingHandler = Depends(inject_handler(container.add_tour_pricing_handler)),
) -> TourResponse:
    try:
        tour = handler.handle(AddTourPricingCommand(tour_id=tour_id, **request.model_dump()))
        return _tour_response(tour, "Pricing added successfully")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("add tour pricing", e) from e


@router.post("/{tour_id}/publish", response_model=TourResponse)
def publish_tour(
    tour_id: int,
    _: CurrentAdmin,
    handler: PublishTourHandler = Depends(inject_handler(container.publish_tour_handler)),
) -> TourResponse:
    """Open a draft tour for registration."""
    try:
        tour = handler.handle(PublishTourCommand(tour_id=tour_id))
        return _tour_response(tour, "Tour published successfully")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("publish tour", e) from e


@router.post("/{tour_id}/close-registration", response_model=TourResponse)
def close_tour_registration(
    tour_id: int,
    _: CurrentAdmin,
    handler: CloseTourRegistrationHandler = Depends(
        inject_handler(container.close_tour_registration_handler)
    ),
) -> TourResponse:
    try:
        tour = handler.handle(CloseTourRegistrationCommand(tour_id=tour_id))
        return _tour_response(tour, "Tour registration closed")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("close tour registration", e) from e


@router.get("", response_model=PaginatedResponse[TourSummarySchema])
def list_tours(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    tour_status: TourStatus | None = Query(None, alias="status"),
    handler: GetToursHandler = Depends(inject_handler(container.get_tours_handler)),
) -> PaginatedResponse[TourSummarySchema]:
    """List active tours with their remaining capacity."""
    result = handler.handle(
        GetToursQuery(pagination=Pagination(page=page, page_size=page_size), status=tour_status)
    )
    return PaginatedResponse.from_result(
        result, [TourSummarySchema.from_availability(item) for item in result.items]
    )


@router.get("/{tour_id}", response_model=TourDetailSchema)
def get_tour(
    tour_id: int,
    handler: GetTourDetailHandler = Depends(inject_handler(container.get_tour_detail_handler)),
) -> TourDetailSchema:
    availability = handler.handle(GetTourDetailQuery(tour_id=tour_id))
    return TourDetailSchema.from_availability(availability)
