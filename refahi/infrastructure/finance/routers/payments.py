"""Payment gateway callbacks.

Administrator-only until a gateway with signed callbacks is wired in.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from refahi.application.finance.commands.complete_payment import (
    CompletePaymentCommand,
    CompletePaymentHandler,
)
from refahi.application.finance.commands.fail_payment import (
    FailPaymentCommand,
    FailPaymentHandler,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.domain.common.value_objects import PaymentId
from refahi.domain.finance.entities.bill import Bill
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.finance.schemas import (
    CompletePaymentRequest,
    FailPaymentRequest,
    PaymentResponse,
    PaymentSchema,
)
from refahi.infrastructure.identity.dependencies import CurrentAdmin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


def _payment_response(bill: Bill, payment_id: int, message: str) -> PaymentResponse:
    return PaymentResponse(
        success=True,
        message=message,
        bill_id=bill.id.value,
        bill_status=bill.status,
        payment=PaymentSchema.from_domain(bill.get_payment(PaymentId(payment_id))),
    )


@router.post("/{payment_id}/complete", response_model=PaymentResponse)
def complete_payment(
    payment_id: int,
    request: CompletePaymentRequest,
    _: CurrentAdmin,
    handler: CompletePaymentHandler = Depends(
        inject_handler(container.complete_payment_handler)
    ),
) -> PaymentResponse:
    """
    Record a successful gateway payment.

    A bill that becomes fully paid confirms its tour reservation or
    credits the wallet it charges.
    """
    try:
        bill = handler.handle(
            CompletePaymentCommand(
                payment_id=payment_id, gateway_transaction_id=request.gateway_transaction_id
            )
        )
        return _payment_response(bill, payment_id, "Payment completed")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to complete payment {payment_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/{payment_id}/fail", response_model=PaymentResponse)
def fail_payment(
    payment_id: int,
    request: FailPaymentRequest,
    _: CurrentAdmin,
    handler: FailPaymentHandler = Depends(inject_handler(container.fail_payment_handler)),
) -> PaymentResponse:
    try:
        bill = handler.handle(FailPaymentCommand(payment_id=payment_id, reason=request.reason))
        return _payment_response(bill, payment_id, "Payment marked as failed")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to fail payment {payment_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
