from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import MemberId, NationalId
from refahi.domain.membership.entities.member import Member


class MemberRepositoryProtocol(Protocol):
    def find_by_id(self, member_id: MemberId) -> Member | None: ...

    def find_by_national_code(self, national_code: NationalId) -> Member | None: ...

    def national_code_exists(self, national_code: NationalId) -> bool: ...

    def membership_number_exists(self, membership_number: str) -> bool: ...

    def find_all(
        self, pagination: Pagination, search: str | None = None
    ) -> tuple[list[Member], int]: ...

    def save(self, member: Member) -> Member: ...
