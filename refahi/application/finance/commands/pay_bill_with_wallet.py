"""Pay the remaining amount of a bill from the owner's wallet."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.access import load_bill_for
from refahi.application.finance.protocols import BillRepositoryProtocol, WalletRepositoryProtocol
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import NationalId
from refahi.domain.finance.entities.bill import Bill
from refahi.domain.finance.enums import PaymentMethod
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PayBillWithWalletCommand(Command):
    bill_id: int
    national_code: str


class PayBillWithWalletHandler(CommandHandler[PayBillWithWalletCommand, Bill]):
    def __init__(
        self,
        bill_repository: BillRepositoryProtocol,
        wallet_repository: WalletRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.bill_repository = bill_repository
        self.wallet_repository = wallet_repository
        self.uow = uow

    def handle(self, command: PayBillWithWalletCommand) -> Bill:
        now = utc_now()
        with self.uow:
            bill = load_bill_for(self.bill_repository, command.bill_id, command.national_code)
            wallet = self.wallet_repository.find_by_national_code(NationalId(command.national_code))
            if wallet is None:
                raise BusinessRuleViolationError("wallet_exists", "You do not have a wallet yet")

            amount = bill.remaining_amount
            # Debit first so an insufficient balance fails before the bill changes
            wallet.pay_bill(amount, bill.bill_number, now)
            pending = bill.create_payment(amount, PaymentMethod.WALLET, now)
            bill = self.bill_repository.save(bill)
            payment = next(
                p for p in bill.payments if p.tracking_number == pending.tracking_number
            )

            bill.record_payment(payment.id, f"WALLET-{pending.tracking_number}", now)
            self.uow.track(bill)
            bill = self.bill_repository.save(bill)
            self.wallet_repository.save(wallet)
            self.uow.commit()

        logger.info(
            "bill_paid_with_wallet",
            bill_id=bill.id.value,
            amount=amount.amount_rials,
            wallet_id=wallet.id.value,
        )
        return bill
