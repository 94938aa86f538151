from .bill_repository import BillRepositoryProtocol
from .wallet_repository import WalletRepositoryProtocol

__all__ = ["BillRepositoryProtocol", "WalletRepositoryProtocol"]
