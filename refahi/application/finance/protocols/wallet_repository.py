from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import NationalId, WalletId
from refahi.domain.finance.entities.wallet import Wallet, WalletTransaction


class WalletRepositoryProtocol(Protocol):
    def find_by_id(self, wallet_id: WalletId) -> Wallet | None: ...

    def find_by_national_code(self, national_code: NationalId) -> Wallet | None: ...

    def find_transactions(
        self, wallet_id: WalletId, pagination: Pagination
    ) -> tuple[list[WalletTransaction], int]:
        """Transactions of a wallet, newest first."""
        ...

    def save(self, wallet: Wallet) -> Wallet: ...
