from typing import Protocol

from refahi.application.membership.dtos import MemberInfo
from refahi.domain.common.eligibility import EligibilityResult


class MemberInfoProviderProtocol(Protocol):
    """Read access to members for the other modules."""

    def get_member_info(self, national_code: str) -> MemberInfo | None: ...

    def validate_member_eligibility(
        self,
        national_code: str,
        required_capabilities: list[str] | None = None,
        required_features: list[str] | None = None,
        required_agencies: list[int] | None = None,
    ) -> EligibilityResult: ...
