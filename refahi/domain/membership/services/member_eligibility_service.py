"""Domain service checking a member against a set of access requirements."""

from datetime import datetime

from refahi.domain.common.eligibility import EligibilityResult
from refahi.domain.membership.entities.member import Member


class MemberEligibilityService:
    """
    Decides whether a member may access a restricted offering.

    A requirement list that is empty places no restriction. A non-empty list
    is satisfied when the member holds at least one of its entries.
    """

    def check(
        self,
        member: Member | None,
        now: datetime,
        required_capabilities: list[str] | None = None,
        required_features: list[str] | None = None,
        required_agencies: list[int] | None = None,
    ) -> EligibilityResult:
        if member is None:
            return EligibilityResult.not_eligible(["Member not found"])

        errors: list[str] = []
        if not member.has_active_membership(now):
            errors.append("Membership is not active")

        if required_capabilities and not set(required_capabilities) & set(member.capabilities):
            errors.append(
                "Member lacks a required capability: " + ", ".join(required_capabilities)
            )
        if required_features and not set(required_features) & set(member.features):
            errors.append("Member lacks a required feature: " + ", ".join(required_features))
        if required_agencies and not set(required_agencies) & set(member.agencies):
            errors.append("Member does not belong to an eligible agency")

        if errors:
            return EligibilityResult.not_eligible(errors)
        return EligibilityResult.eligible()
