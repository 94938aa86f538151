"""Gateway callback for a successful payment."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.common.value_objects import PaymentId
from refahi.domain.finance.entities.bill import Bill
from refahi.exceptions import PaymentNotFoundError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CompletePaymentCommand(Command):
    payment_id: int
    gateway_transaction_id: str


class CompletePaymentHandler(CommandHandler[CompletePaymentCommand, Bill]):
    """
    Record a completed payment on its bill.

    When the bill becomes fully paid, BillFullyPaid is published after the
    commit; reservations are confirmed and wallet charges deposited from there.
    """

    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def handle(self, command: CompletePaymentCommand) -> Bill:
        payment_id = PaymentId(command.payment_id)
        with self.uow:
            bill = self.bill_repository.find_by_payment_id(payment_id)
            if bill is None:
                raise PaymentNotFoundError(command.payment_id)
            bill.record_payment(payment_id, command.gateway_transaction_id, utc_now())
            self.uow.track(bill)
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        logger.info(
            "payment_completed",
            bill_id=bill.id.value,
            payment_id=command.payment_id,
            bill_status=bill.status.value,
        )
        return bill
