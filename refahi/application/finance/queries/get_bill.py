from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler
from refahi.application.finance.access import load_bill_for
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.finance.entities.bill import Bill


@dataclass(frozen=True)
class GetBillQuery(Query):
    bill_id: int
    national_code: str
    is_admin: bool = False


class GetBillHandler(QueryHandler[GetBillQuery, Bill]):
    def __init__(self, bill_repository: BillRepositoryProtocol) -> None:
        self.bill_repository = bill_repository

    def handle(self, query: GetBillQuery) -> Bill:
        return load_bill_for(
            self.bill_repository, query.bill_id, query.national_code, is_admin=query.is_admin
        )
