from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.common.value_objects import BillId
from refahi.domain.finance.entities.bill import Bill
from refahi.exceptions import BillNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CancelBillCommand(Command):
    bill_id: int
    reason: str | None = None


class CancelBillHandler(CommandHandler[CancelBillCommand, Bill]):
    """Cancel a bill; the thing it paid for is told through BillCancelled."""

    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def handle(self, command: CancelBillCommand) -> Bill:
        with self.uow:
            bill = self.bill_repository.find_by_id(BillId(command.bill_id))
            if bill is None:
                raise BillNotFoundError(command.bill_id)
            if not bill.cancel(command.reason):
                return bill
            self.uow.track(bill)
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        logger.info("bill_cancelled", bill_id=bill.id.value, reason=command.reason)
        return bill
