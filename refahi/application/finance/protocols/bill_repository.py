from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import BillId, NationalId, PaymentId
from refahi.domain.finance.entities.bill import Bill
from refahi.domain.finance.enums import BillStatus


class BillRepositoryProtocol(Protocol):
    def find_by_id(self, bill_id: BillId) -> Bill | None: ...

    def find_by_payment_id(self, payment_id: PaymentId) -> Bill | None: ...

    def find_by_reference(self, bill_type: str, reference_id: str) -> list[Bill]: ...

    def find_by_user(
        self,
        national_code: NationalId,
        pagination: Pagination,
        status: BillStatus | None = None,
    ) -> tuple[list[Bill], int]: ...

    def save(self, bill: Bill) -> Bill: ...
