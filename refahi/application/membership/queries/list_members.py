from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.membership.protocols import MemberRepositoryProtocol
from refahi.domain.membership.entities.member import Member


@dataclass(frozen=True)
class ListMembersQuery(Query):
    pagination: Pagination = field(default_factory=Pagination)
    search: str | None = None


class ListMembersHandler(QueryHandler[ListMembersQuery, PaginatedResult[Member]]):
    def __init__(self, member_repository: MemberRepositoryProtocol) -> None:
        self.member_repository = member_repository

    def handle(self, query: ListMembersQuery) -> PaginatedResult[Member]:
        search = query.search.strip() if query.search else None
        items, total = self.member_repository.find_all(query.pagination, search=search or None)
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
