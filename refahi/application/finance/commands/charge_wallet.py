"""Top up a wallet through a bill."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.finance.access import get_or_open_wallet
from refahi.application.finance.protocols import BillRepositoryProtocol, WalletRepositoryProtocol
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import Money, NationalId
from refahi.domain.finance.entities.bill import Bill
from refahi.domain.finance.enums import BillType, WalletStatus
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChargeWalletCommand(Command):
    national_code: str
    amount_rials: int
    full_name: str | None = None


class ChargeWalletHandler(CommandHandler[ChargeWalletCommand, Bill]):
    """
    Issue a WalletCharge bill for the amount.

    The wallet is credited by the BillFullyPaid consumer once the bill is
    paid; the bill's reference id is the wallet id.
    """

    def __init__(
        self,
        bill_repository: BillRepositoryProtocol,
        wallet_repository: WalletRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.bill_repository = bill_repository
        self.wallet_repository = wallet_repository
        self.uow = uow

    def handle(self, command: ChargeWalletCommand) -> Bill:
        now = utc_now()
        amount = Money(command.amount_rials)
        national_code = NationalId(command.national_code)

        with self.uow:
            wallet = get_or_open_wallet(self.wallet_repository, national_code)
            if wallet.status != WalletStatus.ACTIVE:
                raise BusinessRuleViolationError("wallet_active", "Wallet is not active")

            bill = Bill.create(
                title="Wallet charge",
                reference_id=str(wallet.id.value),
                bill_type=BillType.WALLET_CHARGE.value,
                user_national_code=national_code,
                now=now,
                user_full_name=command.full_name,
            )
            bill.add_item("Wallet charge", amount)
            bill.issue(now)
            bill = self.bill_repository.save(bill)
            self.uow.commit()

        logger.info(
            "wallet_charge_requested",
            wallet_id=wallet.id.value,
            bill_id=bill.id.value,
            amount=amount.amount_rials,
        )
        return bill
