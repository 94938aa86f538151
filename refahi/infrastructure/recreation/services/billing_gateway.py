"""Billing gateway backed by the finance module's bill handlers."""

from refahi.application.finance.commands.create_bill import (
    BillItemData,
    CreateBillCommand,
    CreateBillHandler,
)
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.application.recreation.protocols import (
    RESERVATION_BILL_TYPE,
    BillSummary,
    ReservationBillRequest,
)
from refahi.domain.common.value_objects import BillId
from refahi.domain.finance.entities.bill import Bill


def _summary(bill: Bill) -> BillSummary:
    return BillSummary(
        bill_id=bill.id.value,
        bill_number=bill.bill_number,
        total_amount=bill.total_amount.amount_rials,
        status=bill.status.value,
    )


class FinanceBillingGateway:
    """Creates issued TourReservation bills in finance."""

    def __init__(
        self, create_bill_handler: CreateBillHandler, bill_repository: BillRepositoryProtocol
    ) -> None:
        self.create_bill_handler = create_bill_handler
        self.bill_repository = bill_repository

    def create_reservation_bill(self, request: ReservationBillRequest) -> BillSummary:
        bill = self.create_bill_handler.handle(
            CreateBillCommand(
                title=request.title,
                reference_id=request.reference_id,
                bill_type=RESERVATION_BILL_TYPE,
                user_national_code=request.user_national_code,
                user_full_name=request.user_full_name,
                description=request.description,
                due_date=request.due_date,
                metadata=dict(request.metadata),
                items=[
                    BillItemData(
                        title=line.title,
                        unit_price_rials=line.unit_price,
                        quantity=line.quantity,
                        description=line.description,
                    )
                    for line in request.lines
                ],
                issue_immediately=True,
            )
        )
        return _summary(bill)

    def get_bill_summary(self, bill_id: int) -> BillSummary | None:
        bill = self.bill_repository.find_by_id(BillId(bill_id))
        return _summary(bill) if bill else None
