"""API routes for reviewing and tracking facility requests."""

from fastapi import APIRouter, Depends, Query

from refahi.application.common import Pagination
from refahi.application.facilities.commands.cancel_facility_request import (
    CancelFacilityRequestCommand,
    CancelFacilityRequestHandler,
)
from refahi.application.facilities.commands.review_facility_request import (
    ApproveFacilityRequestCommand,
    ApproveFacilityRequestHandler,
    RejectFacilityRequestCommand,
    RejectFacilityRequestHandler,
    StartFacilityRequestReviewCommand,
    StartFacilityRequestReviewHandler,
)
from refahi.application.facilities.queries.get_facility_request import (
    GetFacilityRequestDetailHandler,
    GetFacilityRequestDetailQuery,
    GetMyFacilityRequestsHandler,
    GetMyFacilityRequestsQuery,
)
from refahi.core import container
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.domain.facilities.enums import FacilityRequestStatus
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.facilities.schemas import (
    ApproveRequest,
    CancelRequest,
    FacilityRequestResponse,
    FacilityRequestSchema,
    RejectRequest,
)
from refahi.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser

router = APIRouter(prefix="/facility-requests", tags=["facility-requests"])


def _response(request: FacilityRequest, message: str) -> FacilityRequestResponse:
    return FacilityRequestResponse(
        success=True, message=message, request=FacilityRequestSchema.from_domain(request)
    )


@router.get("/me", response_model=PaginatedResponse[FacilityRequestSchema])
def get_my_facility_requests(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    request_status: FacilityRequestStatus | None = Query(None, alias="status"),
    handler: GetMyFacilityRequestsHandler = Depends(
        inject_handler(container.get_my_facility_requests_handler)
    ),
) -> PaginatedResponse[FacilityRequestSchema]:
    result = handler.handle(
        GetMyFacilityRequestsQuery(
            national_code=current_user.national_code.value,
            pagination=Pagination(page=page, page_size=page_size),
            status=request_status,
        )
    )
    return PaginatedResponse.from_result(
        result, [FacilityRequestSchema.from_domain(r) for r in result.items]
    )


@router.get("/{request_id}", response_model=FacilityRequestSchema)
def get_facility_request(
    request_id: int,
    current_user: CurrentUser,
    handler: GetFacilityRequestDetailHandler = Depends(
        inject_handler(container.get_facility_request_detail_handler)
    ),
) -> FacilityRequestSchema:
    request = handler.handle(
        GetFacilityRequestDetailQuery(
            request_id=request_id,
            national_code=current_user.national_code.value,
            is_admin=current_user.is_admin,
        )
    )
    return FacilityRequestSchema.from_domain(request)


@router.post("/{request_id}/cancel", response_model=FacilityRequestResponse)
def cancel_facility_request(
    request_id: int,
    body: CancelRequest,
    current_user: CurrentUser,
    handler: CancelFacilityRequestHandler = Depends(
        inject_handler(container.cancel_facility_request_handler)
    ),
) -> FacilityRequestResponse:
    request = handler.handle(
        CancelFacilityRequestCommand(
            request_id=request_id,
            national_code=current_user.national_code.value,
            reason=body.reason,
        )
    )
    return _response(request, "Facility request cancelled")


@router.post("/{request_id}/review", response_model=FacilityRequestResponse)
def start_facility_request_review(
    request_id: int,
    _: CurrentAdmin,
    handler: StartFacilityRequestReviewHandler = Depends(
        inject_handler(container.start_facility_request_review_handler)
    ),
) -> FacilityRequestResponse:
    request = handler.handle(StartFacilityRequestReviewCommand(request_id=request_id))
    return _response(request, "Review started")


@router.post("/{request_id}/approve", response_model=FacilityRequestResponse)
def approve_facility_request(
    request_id: int,
    body: ApproveRequest,
    _: CurrentAdmin,
    handler: ApproveFacilityRequestHandler = Depends(
        inject_handler(container.approve_facility_request_handler)
    ),
) -> FacilityRequestResponse:
    request = handler.handle(
        ApproveFacilityRequestCommand(
            request_id=request_id,
            approved_amount_rials=body.approved_amount_rials,
            notes=body.notes,
        )
    )
    return _response(request, "Facility request approved")


@router.post("/{request_id}/reject", response_model=FacilityRequestResponse)
def reject_facility_request(
    request_id: int,
    body: RejectRequest,
    _: CurrentAdmin,
    handler: RejectFacilityRequestHandler = Depends(
        inject_handler(container.reject_facility_request_handler)
    ),
) -> FacilityRequestResponse:
    request = handler.handle(
        RejectFacilityRequestCommand(request_id=request_id, reason=body.reason)
    )
    return _response(request, "Facility request rejected")
