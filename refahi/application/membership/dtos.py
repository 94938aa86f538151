"""Read models the membership module exposes to other modules."""

from dataclasses import dataclass, field
from datetime import date

from refahi.domain.membership.entities.member import Member


@dataclass(frozen=True)
class MemberInfo:
    member_id: int
    national_code: str
    membership_number: str
    first_name: str
    last_name: str
    has_active_membership: bool
    birth_date: date | None = None
    phone_number: str | None = None
    email: str | None = None
    capabilities: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    agencies: list[int] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_member(cls, member: Member, has_active_membership: bool) -> "MemberInfo":
        return cls(
            member_id=member.id.value,
            national_code=member.national_code.value,
            membership_number=member.membership_number,
            first_name=member.first_name,
            last_name=member.last_name,
            has_active_membership=has_active_membership,
            birth_date=member.birth_date,
            phone_number=member.phone_number.value if member.phone_number else None,
            email=member.email,
            capabilities=list(member.capabilities),
            features=list(member.features),
            agencies=list(member.agencies),
        )
