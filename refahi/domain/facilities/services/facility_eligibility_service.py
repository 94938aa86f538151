"""Eligibility of a member for a facility based on features and capabilities."""

from refahi.domain.common.eligibility import EligibilityResult
from refahi.domain.facilities.entities.facility import Facility


class FacilityEligibilityService:
    """
    Checks member features and capabilities against a facility's policy.

    Holding any prohibited feature or capability disqualifies. When the
    facility requires both features and capabilities, the member needs one
    of each; when it requires only one kind, one item of that kind suffices.
    """

    def check(
        self,
        facility: Facility,
        member_features: list[str],
        member_capabilities: list[str],
    ) -> EligibilityResult:
        if not facility.has_restrictions:
            return EligibilityResult.eligible()

        features = set(member_features)
        capabilities = set(member_capabilities)
        errors: list[str] = []

        prohibited_features = [f for f in facility.prohibited_features if f in features]
        if prohibited_features:
            errors.append("Member has prohibited features: " + ", ".join(prohibited_features))
        prohibited_capabilities = [
            c for c in facility.prohibited_capabilities if c in capabilities
        ]
        if prohibited_capabilities:
            errors.append(
                "Member has prohibited capabilities: " + ", ".join(prohibited_capabilities)
            )

        has_feature = not facility.required_features or bool(
            features & set(facility.required_features)
        )
        has_capability = not facility.required_capabilities or bool(
            capabilities & set(facility.required_capabilities)
        )
        if not has_feature:
            errors.append(
                "Member needs one of the features: " + ", ".join(facility.required_features)
            )
        if not has_capability:
            errors.append(
                "Member needs one of the capabilities: "
                + ", ".join(facility.required_capabilities)
            )

        if errors:
            return EligibilityResult.not_eligible(errors)
        return EligibilityResult.eligible()
