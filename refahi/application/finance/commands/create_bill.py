"""Create a bill, optionally issuing it right away."""

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_objects import Money, NationalId
from refahi.domain.finance.entities.bill import Bill
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BillItemData:
    title: str
    unit_price_rials: int
    quantity: int = 1
    discount_percentage: float = 0.0
    description: str | None = None


@dataclass(frozen=True)
class CreateBillCommand(Command):
    title: str
    reference_id: str
    bill_type: str
    user_national_code: str
    items: list[BillItemData] = field(default_factory=list)
    user_full_name: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    issue_immediately: bool = False


class CreateBillHandler(CommandHandler[CreateBillCommand, Bill]):
    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def handle(self, command: CreateBillCommand) -> Bill:
        if command.issue_immediately and not command.items:
            raise ValidationError("A bill needs at least one item to be issued", field="items")

        now = utc_now()
        with self.uow:
            bill = Bill.create(
                title=command.title,
                reference_id=command.reference_id,
                bill_type=command.bill_type,
                user_national_code=NationalId(command.user_national_code),
                now=now,
                user_full_name=command.user_full_name,
                description=command.description,
                due_date=command.due_date,
                metadata=command.metadata,
            )
            for item in command.items:
                bill.add_item(
                    title=item.title,
                    unit_price=Money(item.unit_price_rials),
                    quantity=item.quantity,
                    discount_percentage=item.discount_percentage,
                    description=item.description,
                )
            if command.issue_immediately:
                bill.issue(now)
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        logger.info(
            "bill_created",
            bill_id=bill.id.value,
            bill_number=bill.bill_number,
            bill_type=bill.bill_type,
            reference_id=bill.reference_id,
            total_amount=bill.total_amount.amount_rials,
            status=bill.status.value,
        )
        return bill
