from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.common.value_objects import BillId
from refahi.domain.finance.entities.bill import Bill
from refahi.exceptions import BillNotFoundError
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IssueBillCommand(Command):
    bill_id: int


class IssueBillHandler(CommandHandler[IssueBillCommand, Bill]):
    def __init__(self, bill_repository: BillRepositoryProtocol, uow: UnitOfWork) -> None:
        self.bill_repository = bill_repository
        self.uow = uow

    def handle(self, command: IssueBillCommand) -> Bill:
        with self.uow:
            bill = self.bill_repository.find_by_id(BillId(command.bill_id))
            if bill is None:
                raise BillNotFoundError(command.bill_id)
            bill.issue(utc_now())
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        logger.info("bill_issued", bill_id=bill.id.value, bill_number=bill.bill_number)
        return bill
