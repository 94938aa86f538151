"""Member lookups and eligibility checks used by other modules."""

from refahi.application.membership.dtos import MemberInfo
from refahi.application.membership.protocols.member_repository import MemberRepositoryProtocol
from refahi.domain.common.eligibility import EligibilityResult
from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_objects import NationalId
from refahi.domain.membership.services.member_eligibility_service import (
    MemberEligibilityService,
)
from refahi.utils import utc_now


class MemberInfoProvider:
    def __init__(
        self,
        member_repository: MemberRepositoryProtocol,
        eligibility_service: MemberEligibilityService,
    ) -> None:
        self.member_repository = member_repository
        self.eligibility_service = eligibility_service

    def get_member_info(self, national_code: str) -> MemberInfo | None:
        """Return the member with this national code, or None for unknown or malformed codes."""
        try:
            code = NationalId(national_code)
        except ValidationError:
            return None
        member = self.member_repository.find_by_national_code(code)
        if member is None:
            return None
        return MemberInfo.from_member(member, member.has_active_membership(utc_now()))

    def validate_member_eligibility(
        self,
        national_code: str,
        required_capabilities: list[str] | None = None,
        required_features: list[str] | None = None,
        required_agencies: list[int] | None = None,
    ) -> EligibilityResult:
        try:
            member = self.member_repository.find_by_national_code(NationalId(national_code))
        except ValidationError:
            member = None
        return self.eligibility_service.check(
            member,
            utc_now(),
            required_capabilities=required_capabilities,
            required_features=required_features,
            required_agencies=required_agencies,
        )
