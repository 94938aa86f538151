"""Member aggregate of the association's registry."""

from dataclasses import dataclass, field
from datetime import date, datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_objects import MemberId, NationalId, PhoneNumber

MAX_NAME_LENGTH = 100
MAX_MEMBERSHIP_NUMBER_LENGTH = 50


def age_on(birth_date: date, on: date) -> int:
    """Full years between ``birth_date`` and ``on``."""
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def _clean_tags(values: list[str]) -> list[str]:
    cleaned: list[str] = []
    for value in values:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


@dataclass
class Member(AggregateRoot[MemberId]):
    """
    A registered member of the association.

    Business Rules:
    - National code and membership number are unique (enforced at repository level)
    - First and last name are required
    - Membership end, when set, cannot be before membership start
    - Capabilities and features are free-form tags used for eligibility checks
    """

    id: MemberId
    membership_number: str
    national_code: NationalId
    first_name: str
    last_name: str
    membership_start: datetime
    phone_number: PhoneNumber | None = None
    email: str | None = None
    birth_date: date | None = None
    membership_end: datetime | None = None
    is_active: bool = True
    capabilities: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    agencies: list[int] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self._validate_name(self.first_name, "first_name")
        self._validate_name(self.last_name, "last_name")
        if not self.membership_number or not self.membership_number.strip():
            raise ValidationError("Membership number cannot be empty", field="membership_number")
        if len(self.membership_number) > MAX_MEMBERSHIP_NUMBER_LENGTH:
            raise ValidationError(
                f"Membership number cannot exceed {MAX_MEMBERSHIP_NUMBER_LENGTH} characters",
                field="membership_number",
            )
        self._validate_period(self.membership_start, self.membership_end)

    @staticmethod
    def _validate_name(value: str, field_name: str) -> None:
        if not value or not value.strip():
            raise ValidationError(f"{field_name} cannot be empty", field=field_name)
        if len(value) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"{field_name} cannot exceed {MAX_NAME_LENGTH} characters", field=field_name
            )

    @staticmethod
    def _validate_period(start: datetime, end: datetime | None) -> None:
        if end is not None and end < start:
            raise ValidationError(
                "Membership end cannot be before membership start", field="membership_end"
            )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def has_active_membership(self, now: datetime) -> bool:
        """Active flag set and ``now`` within the membership period."""
        if not self.is_active or self.membership_start > now:
            return False
        return self.membership_end is None or self.membership_end >= now

    def age_at(self, on: date) -> int | None:
        if self.birth_date is None:
            return None
        return age_on(self.birth_date, on)

    def update_profile(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        phone_number: PhoneNumber | None = None,
        email: str | None = None,
        birth_date: date | None = None,
    ) -> None:
        if first_name is not None:
            self._validate_name(first_name, "first_name")
            self.first_name = first_name.strip()
        if last_name is not None:
            self._validate_name(last_name, "last_name")
            self.last_name = last_name.strip()
        if phone_number is not None:
            self.phone_number = phone_number
        if email is not None:
            self.email = email.strip() or None
        if birth_date is not None:
            self.birth_date = birth_date

    def set_capabilities(self, capabilities: list[str]) -> None:
        self.capabilities = _clean_tags(capabilities)

    def set_features(self, features: list[str]) -> None:
        self.features = _clean_tags(features)

    def set_agencies(self, agencies: list[int]) -> None:
        self.agencies = sorted(set(agencies))

    def renew_membership(self, membership_end: datetime | None) -> None:
        self._validate_period(self.membership_start, membership_end)
        self.membership_end = membership_end
        self.is_active = True

    def change_membership_period(self, start: datetime, end: datetime | None) -> None:
        self._validate_period(start, end)
        self.membership_start = start
        self.membership_end = end

    def deactivate(self) -> None:
        self.is_active = False

    def activate(self) -> None:
        self.is_active = True

    @classmethod
    def register(
        cls,
        membership_number: str,
        national_code: NationalId,
        first_name: str,
        last_name: str,
        membership_start: datetime,
        membership_end: datetime | None = None,
        phone_number: PhoneNumber | None = None,
        email: str | None = None,
        birth_date: date | None = None,
        capabilities: list[str] | None = None,
        features: list[str] | None = None,
        agencies: list[int] | None = None,
    ) -> "Member":
        """Create a new member (ID will be 0 until persisted)."""
        return cls(
            id=MemberId.generate(),
            membership_number=membership_number.strip(),
            national_code=national_code,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            membership_start=membership_start,
            membership_end=membership_end,
            phone_number=phone_number,
            email=email,
            birth_date=birth_date,
            capabilities=_clean_tags(capabilities or []),
            features=_clean_tags(features or []),
            agencies=sorted(set(agencies or [])),
        )
