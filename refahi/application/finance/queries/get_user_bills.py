from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.finance.protocols import BillRepositoryProtocol
from refahi.domain.common.value_objects import NationalId
from refahi.domain.finance.entities.bill import Bill
from refahi.domain.finance.enums import BillStatus


@dataclass(frozen=True)
class GetUserBillsQuery(Query):
    national_code: str
    pagination: Pagination = field(default_factory=Pagination)
    status: BillStatus | None = None


class GetUserBillsHandler(QueryHandler[GetUserBillsQuery, PaginatedResult[Bill]]):
    def __init__(self, bill_repository: BillRepositoryProtocol) -> None:
        self.bill_repository = bill_repository

    def handle(self, query: GetUserBillsQuery) -> PaginatedResult[Bill]:
        items, total = self.bill_repository.find_by_user(
            NationalId(query.national_code), query.pagination, status=query.status
        )
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
