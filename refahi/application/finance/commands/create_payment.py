"""Start an online payment for the remaining amount of a bill."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.access import load_bill_for
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.finance.entities.bill import Bill, Payment
from refahi.domain.finance.enums import PaymentMethod
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreatePaymentCommand(Command):
    bill_id: int
    national_code: str


@dataclass(frozen=True)
class CreatePaymentResult:
    bill: Bill
    payment: Payment


class CreatePaymentHandler(CommandHandler[CreatePaymentCommand, CreatePaymentResult]):
    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def handle(self, command: CreatePaymentCommand) -> CreatePaymentResult:
        with self.uow:
            bill = load_bill_for(self.bill_repository, command.bill_id, command.national_code)
            pending = bill.create_payment(bill.remaining_amount, PaymentMethod.ONLINE, utc_now())
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        payment = next(p for p in bill.payments if p.tracking_number == pending.tracking_number)
        logger.info(
            "payment_created",
            bill_id=bill.id.value,
            payment_id=payment.id.value,
            tracking_number=payment.tracking_number,
            amount=payment.amount.amount_rials,
        )
        return CreatePaymentResult(bill=bill, payment=payment)
