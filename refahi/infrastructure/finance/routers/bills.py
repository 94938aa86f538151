"""API routes for bills."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.finance.commands.cancel_bill import CancelBillCommand, CancelBillHandler
from refahi.application.finance.commands.create_bill import (
    BillItemData,
    CreateBillCommand,
    CreateBillHandler,
)
from refahi.application.finance.commands.create_payment import (
    CreatePaymentCommand,
    CreatePaymentHandler,
)
from refahi.application.finance.commands.issue_bill import IssueBillCommand, IssueBillHandler
from refahi.application.finance.queries.get_bill import GetBillHandler, GetBillQuery
from refahi.application.finance.queries.get_user_bills import (
    GetUserBillsHandler,
    GetUserBillsQuery,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.domain.finance.enums import BillStatus
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.finance.schemas import (
    BillDetailSchema,
    BillResponse,
    BillSummarySchema,
    CancelBillRequest,
    CreateBillRequest,
    PaymentResponse,
    PaymentSchema,
)
from refahi.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bills", tags=["bills"])


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
def create_bill(
    request: CreateBillRequest,
    _: CurrentAdmin,
    handler: CreateBillHandler = Depends(inject_handler(container.create_bill_handler)),
) -> BillResponse:
    """
    Create a bill for a user.

    The bill stays in Draft unless ``issue_immediately`` is set.
    """
    try:
        data = request.model_dump(exclude={"items"})
        bill = handler.handle(
            CreateBillCommand(
                **data,
                items=[BillItemData(**item.model_dump()) for item in request.items],
            )
        )
        return BillResponse(
            success=True, message="Bill created", bill=BillDetailSchema.from_domain(bill)
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create bill: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/{bill_id}/issue", response_model=BillResponse)
def issue_bill(
    bill_id: int,
    _: CurrentAdmin,
    handler: IssueBillHandler = Depends(inject_handler(container.issue_bill_handler)),
) -> BillResponse:
    try:
        bill = handler.handle(IssueBillCommand(bill_id=bill_id))
        return BillResponse(
            success=True, message="Bill issued", bill=BillDetailSchema.from_domain(bill)
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to issue bill {bill_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/{bill_id}/cancel", response_model=BillResponse)
def cancel_bill(
    bill_id: int,
    request: CancelBillRequest,
    _: CurrentAdmin,
    handler: CancelBillHandler = Depends(inject_handler(container.cancel_bill_handler)),
) -> BillResponse:
    """Cancel an unpaid bill; a reservation bill also cancels its reservation."""
    try:
        bill = handler.handle(CancelBillCommand(bill_id=bill_id, reason=request.reason))
        return BillResponse(
            success=True, message="Bill cancelled", bill=BillDetailSchema.from_domain(bill)
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to cancel bill {bill_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{bill_id}/payments", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED
)
def create_payment(
    bill_id: int,
    current_user: CurrentUser,
    handler: CreatePaymentHandler = Depends(inject_handler(container.create_payment_handler)),
) -> PaymentResponse:
    """Open a pending online payment for the remaining amount of the bill."""
    try:
        result = handler.handle(
            CreatePaymentCommand(bill_id=bill_id, national_code=current_user.national_code.value)
        )
        return PaymentResponse(
            success=True,
            message="Payment created",
            bill_id=result.bill.id.value,
            bill_status=result.bill.status,
            payment=PaymentSchema.from_domain(result.payment),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create payment for bill {bill_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/me", response_model=PaginatedResponse[BillSummarySchema])
def get_my_bills(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    bill_status: BillStatus | None = Query(None, alias="status"),
    handler: GetUserBillsHandler = Depends(inject_handler(container.get_user_bills_handler)),
) -> PaginatedResponse[BillSummarySchema]:
    result = handler.handle(
        GetUserBillsQuery(
            national_code=current_user.national_code.value,
            pagination=Pagination(page=page, page_size=page_size),
            status=bill_status,
        )
    )
    return PaginatedResponse.from_result(
        result, [BillSummarySchema.from_domain(bill) for bill in result.items]
    )


@router.get("/{bill_id}", response_model=BillDetailSchema)
def get_bill(
    bill_id: int,
    current_user: CurrentUser,
    handler: GetBillHandler = Depends(inject_handler(container.get_bill_handler)),
) -> BillDetailSchema:
    bill = handler.handle(
        GetBillQuery(
            bill_id=bill_id,
            national_code=current_user.national_code.value,
            is_admin=current_user.is_admin,
        )
    )
    return BillDetailSchema.from_domain(bill)
