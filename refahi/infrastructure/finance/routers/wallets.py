"""API routes for the current user's wallet."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.finance.commands.charge_wallet import (
    ChargeWalletCommand,
    ChargeWalletHandler,
)
from refahi.application.finance.commands.pay_bill_with_wallet import (
    PayBillWithWalletCommand,
    PayBillWithWalletHandler,
)
from refahi.application.finance.queries.get_wallet import GetWalletHandler, GetWalletQuery
from refahi.application.finance.queries.get_wallet_transactions import (
    GetWalletTransactionsHandler,
    GetWalletTransactionsQuery,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.finance.schemas import (
    BillDetailSchema,
    BillResponse,
    ChargeWalletRequest,
    PayWithWalletRequest,
    WalletSchema,
    WalletTransactionSchema,
)
from refahi.infrastructure.identity.dependencies import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wallets", tags=["wallets"])


@router.get("/me", response_model=WalletSchema)
def get_my_wallet(
    current_user: CurrentUser,
    handler: GetWalletHandler = Depends(inject_handler(container.get_wallet_handler)),
) -> WalletSchema:
    """Return the user's wallet, opening an empty one on first access."""
    wallet = handler.handle(GetWalletQuery(national_code=current_user.national_code.value))
    return WalletSchema.from_domain(wallet)


@router.get("/me/transactions", response_model=PaginatedResponse[WalletTransactionSchema])
def get_my_wallet_transactions(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    handler: GetWalletTransactionsHandler = Depends(
        inject_handler(container.get_wallet_transactions_handler)
    ),
) -> PaginatedResponse[WalletTransactionSchema]:
    result = handler.handle(
        GetWalletTransactionsQuery(
            national_code=current_user.national_code.value,
            pagination=Pagination(page=page, page_size=page_size),
        )
    )
    return PaginatedResponse.from_result(
        result, [WalletTransactionSchema.from_domain(t) for t in result.items]
    )


@router.post("/me/charge", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
def charge_my_wallet(
    request: ChargeWalletRequest,
    current_user: CurrentUser,
    handler: ChargeWalletHandler = Depends(inject_handler(container.charge_wallet_handler)),
) -> BillResponse:
    """
    Issue a wallet charge bill.

    The wallet is credited once the bill is fully paid.
    """
    try:
        bill = handler.handle(
            ChargeWalletCommand(
                national_code=current_user.national_code.value,
                amount_rials=request.amount_rials,
            )
        )
        return BillResponse(
            success=True,
            message="Wallet charge bill issued",
            bill=BillDetailSchema.from_domain(bill),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to charge wallet: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/me/pay", response_model=BillResponse)
def pay_bill_with_wallet(
    request: PayWithWalletRequest,
    current_user: CurrentUser,
    handler: PayBillWithWalletHandler = Depends(
        inject_handler(container.pay_bill_with_wallet_handler)
    ),
) -> BillResponse:
    try:
        bill = handler.handle(
            PayBillWithWalletCommand(
                bill_id=request.bill_id, national_code=current_user.national_code.value
            )
        )
        return BillResponse(
            success=True, message="Bill paid from wallet", bill=BillDetailSchema.from_domain(bill)
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to pay bill {request.bill_id} from wallet: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
