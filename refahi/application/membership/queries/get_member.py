from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler
from refahi.application.membership.protocols import MemberRepositoryProtocol
from refahi.domain.common.value_objects import MemberId, NationalId
from refahi.domain.membership.entities.member import Member
from refahi.exceptions import MemberNotFoundError


@dataclass(frozen=True)
class GetMemberQuery(Query):
    member_id: int


@dataclass(frozen=True)
class GetMemberByNationalCodeQuery(Query):
    national_code: str


class GetMemberHandler(QueryHandler[GetMemberQuery, Member]):
    def __init__(self, member_repository: MemberRepositoryProtocol) -> None:
        self.member_repository = member_repository

    def handle(self, query: GetMemberQuery) -> Member:
        member = self.member_repository.find_by_id(MemberId(query.member_id))
        if member is None:
            raise MemberNotFoundError(query.member_id)
        return member


class GetMemberByNationalCodeHandler(QueryHandler[GetMemberByNationalCodeQuery, Member]):
    """Also serves the current user's own membership lookup."""

    def __init__(self, member_repository: MemberRepositoryProtocol) -> None:
        self.member_repository = member_repository

    def handle(self, query: GetMemberByNationalCodeQuery) -> Member:
        member = self.member_repository.find_by_national_code(NationalId(query.national_code))
        if member is None:
            raise MemberNotFoundError(
                message=f"No member registered with national code {query.national_code}"
            )
        return member
