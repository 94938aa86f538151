from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.finance.protocols import WalletRepositoryProtocol
from refahi.domain.common.value_objects import NationalId
from refahi.domain.finance.entities.wallet import WalletTransaction


@dataclass(frozen=True)
class GetWalletTransactionsQuery(Query):
    national_code: str
    pagination: Pagination = field(default_factory=Pagination)


class GetWalletTransactionsHandler(
    QueryHandler[GetWalletTransactionsQuery, PaginatedResult[WalletTransaction]]
):
    def __init__(self, wallet_repository: WalletRepositoryProtocol) -> None:
        self.wallet_repository = wallet_repository

    def handle(self, query: GetWalletTransactionsQuery) -> PaginatedResult[WalletTransaction]:
        wallet = self.wallet_repository.find_by_national_code(NationalId(query.national_code))
        if wallet is None:
            return PaginatedResult(items=[], total=0, pagination=query.pagination)
        items, total = self.wallet_repository.find_transactions(wallet.id, query.pagination)
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
