"""Facility aggregate: a welfare loan, grant or card programme."""

from dataclasses import dataclass, field
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import FacilityId
from refahi.domain.facilities.enums import FacilityStatus, FacilityType

MAX_NAME_LENGTH = 200
MAX_CODE_LENGTH = 50


@dataclass
class Facility(AggregateRoot[FacilityId]):
    """
    A facility members can request through its cycles.

    Business Rules:
    - Name and code are required; code is unique (enforced at repository level)
    - A feature or capability cannot be both required and prohibited
    """

    id: FacilityId
    name: str
    code: str
    facility_type: FacilityType
    status: FacilityStatus = FacilityStatus.DRAFT
    description: str | None = None
    bank_name: str | None = None
    required_features: list[str] = field(default_factory=list)
    prohibited_features: list[str] = field(default_factory=list)
    required_capabilities: list[str] = field(default_factory=list)
    prohibited_capabilities: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("Facility name cannot be empty", field="name")
        if len(self.name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Facility name cannot exceed {MAX_NAME_LENGTH} characters", field="name"
            )
        if not self.code or not self.code.strip():
            raise ValidationError("Facility code cannot be empty", field="code")
        if len(self.code) > MAX_CODE_LENGTH:
            raise ValidationError(
                f"Facility code cannot exceed {MAX_CODE_LENGTH} characters", field="code"
            )
        if set(self.required_features) & set(self.prohibited_features):
            raise ValidationError(
                "A feature cannot be both required and prohibited", field="required_features"
            )
        if set(self.required_capabilities) & set(self.prohibited_capabilities):
            raise ValidationError(
                "A capability cannot be both required and prohibited",
                field="required_capabilities",
            )

    @property
    def has_restrictions(self) -> bool:
        return bool(
            self.required_features
            or self.prohibited_features
            or self.required_capabilities
            or self.prohibited_capabilities
        )

    def activate(self) -> None:
        if self.status != FacilityStatus.DRAFT:
            raise BusinessRuleViolationError(
                "activate_requires_draft", f"Facility in status {self.status} cannot be activated"
            )
        self.status = FacilityStatus.ACTIVE

    def suspend(self) -> None:
        if self.status != FacilityStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "suspend_requires_active", "Only an active facility can be suspended"
            )
        self.status = FacilityStatus.SUSPENDED

    def close(self) -> None:
        if self.status == FacilityStatus.DRAFT:
            raise BusinessRuleViolationError(
                "close_requires_activation", "A draft facility cannot be closed"
            )
        self.status = FacilityStatus.CLOSED

    @classmethod
    def create(
        cls,
        name: str,
        code: str,
        facility_type: FacilityType,
        description: str | None = None,
        bank_name: str | None = None,
        required_features: list[str] | None = None,
        prohibited_features: list[str] | None = None,
        required_capabilities: list[str] | None = None,
        prohibited_capabilities: list[str] | None = None,
    ) -> "Facility":
        """Create a new draft facility (ID will be 0 until persisted)."""
        return cls(
            id=FacilityId.generate(),
            name=name.strip(),
            code=code.strip().upper(),
            facility_type=facility_type,
            description=description,
            bank_name=bank_name,
            required_features=list(required_features or []),
            prohibited_features=list(prohibited_features or []),
            required_capabilities=list(required_capabilities or []),
            prohibited_capabilities=list(prohibited_capabilities or []),
        )
