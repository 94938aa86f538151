"""Loading finance aggregates on behalf of a user."""

from refahi.application.finance.protocols import BillRepositoryProtocol, WalletRepositoryProtocol
from refahi.domain.common.value_objects import BillId, NationalId
from refahi.domain.finance.entities.bill import Bill
from refahi.domain.finance.entities.wallet import Wallet
from refahi.exceptions import BillNotFoundError, ForbiddenError
from refahi.utils import utc_now


def load_bill_for(
    bill_repository: BillRepositoryProtocol,
    bill_id: int,
    national_code: str,
    is_admin: bool = False,
) -> Bill:
    """
    Load a bill the user may see.

    Raises:
        BillNotFoundError: If the bill does not exist
        ForbiddenError: If the bill belongs to someone else and the user is not an admin
    """
    bill = bill_repository.find_by_id(BillId(bill_id))
    if bill is None:
        raise BillNotFoundError(bill_id)
    if not is_admin and bill.user_national_code.value != national_code:
        raise ForbiddenError("You do not have access to this bill")
    return bill


def get_or_open_wallet(
    wallet_repository: WalletRepositoryProtocol, national_code: NationalId
) -> Wallet:
    """The user's wallet, opened and flushed on first use."""
    wallet = wallet_repository.find_by_national_code(national_code)
    if wallet is None:
        wallet = wallet_repository.save(Wallet.open(national_code, utc_now()))
    return wallet
