"""Outcome of an eligibility check."""

from dataclasses import dataclass, field


@dataclass
class EligibilityResult:
    """Whether a member is eligible, with the reasons when not."""

    is_eligible: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def eligible(cls) -> "EligibilityResult":
        return cls(is_eligible=True)

    @classmethod
    def not_eligible(cls, errors: list[str]) -> "EligibilityResult":
        return cls(is_eligible=False, errors=errors)
