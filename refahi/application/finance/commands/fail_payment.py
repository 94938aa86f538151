from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.common.value_objects import PaymentId
from refahi.domain.finance.entities.bill import Bill
from refahi.exceptions import PaymentNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FailPaymentCommand(Command):
    payment_id: int
    reason: str | None = None


class FailPaymentHandler(CommandHandler[FailPaymentCommand, Bill]):
    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def handle(self, command: FailPaymentCommand) -> Bill:
        payment_id = PaymentId(command.payment_id)
        with self.uow:
            bill = self.bill_repository.find_by_payment_id(payment_id)
            if bill is None:
                raise PaymentNotFoundError(command.payment_id)
            bill.fail_payment(payment_id, command.reason)
            self.uow.track(bill)
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        logger.info(
            "payment_failed",
            bill_id=bill.id.value,
            payment_id=command.payment_id,
            reason=command.reason,
        )
        return bill
