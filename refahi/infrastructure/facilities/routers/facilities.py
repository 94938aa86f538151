"""API routes for facilities and their cycles."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.facilities.commands.activate_facility import (
    ActivateFacilityCommand,
    ActivateFacilityHandler,
)
from refahi.application.facilities.commands.change_cycle_status import (
    ActivateFacilityCycleCommand,
    ActivateFacilityCycleHandler,
    CloseFacilityCycleCommand,
    CloseFacilityCycleHandler,
)
from refahi.application.facilities.commands.create_facility import (
    CreateFacilityCommand,
    CreateFacilityHandler,
)
from refahi.application.facilities.commands.create_facility_cycle import (
    CreateFacilityCycleCommand,
    CreateFacilityCycleHandler,
)
from refahi.application.facilities.commands.create_facility_request import (
    CreateFacilityRequestCommand,
    CreateFacilityRequestHandler,
)
from refahi.application.facilities.queries.get_facilities import (
    GetFacilitiesHandler,
    GetFacilitiesQuery,
)
from refahi.application.facilities.queries.get_facility_cycles import (
    GetFacilityCyclesHandler,
    GetFacilityCyclesQuery,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.domain.facilities.enums import FacilityCycleStatus, FacilityStatus
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.facilities.schemas import (
    CreateCycleRequest,
    CreateFacilityRequest,
    CycleResponse,
    CycleSchema,
    FacilityRequestResponse,
    FacilityRequestSchema,
    FacilityResponse,
    FacilitySchema,
    SubmitFacilityRequest,
)
from refahi.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/facilities", tags=["facilities"])


@router.post("", response_model=FacilityResponse, status_code=status.HTTP_201_CREATED)
def create_facility(
    request: CreateFacilityRequest,
    _: CurrentAdmin,
    handler: CreateFacilityHandler = Depends(inject_handler(container.create_facility_handler)),
) -> FacilityResponse:
    """
    Create a draft facility.

    Raises:
        HTTPException 409: If the facility code is taken
    """
    try:
        facility = handler.handle(CreateFacilityCommand(**request.model_dump()))
        return FacilityResponse(
            success=True,
            message="Facility created successfully",
            facility=FacilitySchema.from_domain(facility),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create facility: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/{facility_id}/activate", response_model=FacilityResponse)
def activate_facility(
    facility_id: int,
    _: CurrentAdmin,
    handler: ActivateFacilityHandler = Depends(
        inject_handler(container.activate_facility_handler)
    ),
) -> FacilityResponse:
    facility = handler.handle(ActivateFacilityCommand(facility_id=facility_id))
    return FacilityResponse(
        success=True, message="Facility activated", facility=FacilitySchema.from_domain(facility)
    )


@router.get("", response_model=PaginatedResponse[FacilitySchema])
def list_facilities(
    _: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    facility_status: FacilityStatus | None = Query(None, alias="status"),
    handler: GetFacilitiesHandler = Depends(inject_handler(container.get_facilities_handler)),
) -> PaginatedResponse[FacilitySchema]:
    result = handler.handle(
        GetFacilitiesQuery(
            pagination=Pagination(page=page, page_size=page_size), status=facility_status
        )
    )
    return PaginatedResponse.from_result(
        result, [FacilitySchema.from_domain(f) for f in result.items]
    )


@router.post(
    "/{facility_id}/cycles", response_model=CycleResponse, status_code=status.HTTP_201_CREATED
)
def create_facility_cycle(
    facility_id: int,
    request: CreateCycleRequest,
    _: CurrentAdmin,
    handler: CreateFacilityCycleHandler = Depends(
        inject_handler(container.create_facility_cycle_handler)
    ),
) -> CycleResponse:
    try:
        cycle = handler.handle(
            CreateFacilityCycleCommand(facility_id=facility_id, **request.model_dump())
        )
        return CycleResponse(
            success=True, message="Cycle created", cycle_id=cycle.id.value, status=cycle.status
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create cycle for facility {facility_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{facility_id}/cycles", response_model=list[CycleSchema])
def list_facility_cycles(
    facility_id: int,
    _: CurrentUser,
    cycle_status: FacilityCycleStatus | None = Query(None, alias="status"),
    handler: GetFacilityCyclesHandler = Depends(
        inject_handler(container.get_facility_cycles_handler)
    ),
) -> list[CycleSchema]:
    """Cycles of the facility with used and remaining quota."""
    quotas = handler.handle(GetFacilityCyclesQuery(facility_id=facility_id, status=cycle_status))
    return [CycleSchema.from_quota(q) for q in quotas]


@router.post("/cycles/{cycle_id}/activate", response_model=CycleResponse)
def activate_facility_cycle(
    cycle_id: int,
    _: CurrentAdmin,
    handler: ActivateFacilityCycleHandler = Depends(
        inject_handler(container.activate_facility_cycle_handler)
    ),
) -> CycleResponse:
    cycle = handler.handle(ActivateFacilityCycleCommand(cycle_id=cycle_id))
    return CycleResponse(
        success=True, message="Cycle activated", cycle_id=cycle.id.value, status=cycle.status
    )


@router.post("/cycles/{cycle_id}/close", response_model=CycleResponse)
def close_facility_cycle(
    cycle_id: int,
    _: CurrentAdmin,
    handler: CloseFacilityCycleHandler = Depends(
        inject_handler(container.close_facility_cycle_handler)
    ),
) -> CycleResponse:
    cycle = handler.handle(CloseFacilityCycleCommand(cycle_id=cycle_id))
    return CycleResponse(
        success=True, message="Cycle closed", cycle_id=cycle.id.value, status=cycle.status
    )


@router.post(
    "/cycles/{cycle_id}/requests",
    response_model=FacilityRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_facility_request(
    cycle_id: int,
    request: SubmitFacilityRequest,
    current_user: CurrentUser,
    handler: CreateFacilityRequestHandler = Depends(
        inject_handler(container.create_facility_request_handler)
    ),
) -> FacilityRequestResponse:
    """
    Submit a request in an active cycle.

    Repeating a call with the same idempotency key returns the stored request.
    """
    try:
        facility_request = handler.handle(
            CreateFacilityRequestCommand(
                cycle_id=cycle_id,
                national_code=current_user.national_code.value,
                **request.model_dump(),
            )
        )
        return FacilityRequestResponse(
            success=True,
            message="Facility request submitted",
            request=FacilityRequestSchema.from_domain(facility_request),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to submit request in cycle {cycle_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
