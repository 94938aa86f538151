from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler, UnitOfWork
from refahi.application.finance.access import get_or_open_wallet
from refahi.application.finance.protocols import WalletRepositoryProtocol
from refahi.domain.common.value_objects import NationalId
from refahi.domain.finance.entities.wallet import Wallet


@dataclass(frozen=True)
class GetWalletQuery(Query):
    national_code: str


class GetWalletHandler(QueryHandler[GetWalletQuery, Wallet]):
    """Return the user's wallet; an empty one is opened on first access."""

    def __init__(self, wallet_repository: WalletRepositoryProtocol, uow: UnitOfWork) -> None:
        self.wallet_repository = wallet_repository
        self.uow = uow

    def handle(self, query: GetWalletQuery) -> Wallet:
        national_code = NationalId(query.national_code)
        wallet = self.wallet_repository.find_by_national_code(national_code)
        if wallet is not None:
            return wallet
        with self.uow:
            wallet = get_or_open_wallet(self.wallet_repository, national_code)
            self.uow.commit()
        return wallet
