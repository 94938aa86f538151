"""Tour aggregate with its registration capacities and pricing."""

from dataclasses import dataclass, field
from datetime import date, datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.entity import Entity
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import Money, TourCapacityId, TourId, TourPricingId
from refahi.domain.membership.entities.member import age_on
from refahi.domain.recreation.enums import ParticipantType, TourStatus
from refahi.domain.recreation.services.state_machines import TourStateMachine

MAX_TITLE_LENGTH = 250
MAX_GUESTS_LIMIT = 50
DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION = 10

# Statuses in which a tour no longer accepts capacity or pricing changes
_CLOSED_STATUSES = frozenset({TourStatus.COMPLETED, TourStatus.CANCELLED, TourStatus.ARCHIVED})


@dataclass
class TourCapacity(Entity[TourCapacityId]):
    """
    A registration window with its own seat limit.

    Business Rules:
    - Maximum participants must be positive
    - Registration start must be before registration end
    - Per-reservation group size limits satisfy 1 <= min <= max
    """

    id: TourCapacityId
    max_participants: int
    registration_start: datetime
    registration_end: datetime
    is_active: bool = True
    description: str | None = None
    min_participants_per_reservation: int = 1
    max_participants_per_reservation: int = DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.max_participants <= 0:
            raise ValidationError(
                "Maximum participants must be greater than zero",
                field="max_participants",
                value=self.max_participants,
            )
        if self.registration_start >= self.registration_end:
            raise ValidationError(
                "Registration start must be before registration end",
                field="registration_start",
            )
        if self.min_participants_per_reservation < 1:
            raise ValidationError(
                "Minimum participants per reservation must be at least 1",
                field="min_participants_per_reservation",
            )
        if self.max_participants_per_reservation < self.min_participants_per_reservation:
            raise ValidationError(
                "Maximum participants per reservation cannot be below the minimum",
                field="max_participants_per_reservation",
            )

    def is_registration_open(self, now: datetime) -> bool:
        return self.is_active and self.registration_start <= now <= self.registration_end

    def overlaps_with(self, other: "TourCapacity") -> bool:
        return (
            self.registration_start < other.registration_end
            and self.registration_end > other.registration_start
        )

    def accepts_group_size(self, size: int) -> bool:
        return (
            self.min_participants_per_reservation
            <= size
            <= self.max_participants_per_reservation
        )


@dataclass
class TourPricing(Entity[TourPricingId]):
    """
    Price of a seat for one participant type.

    Business Rules:
    - Price must be greater than zero
    - Discount percentage is between 0 and 100
    - valid_from must be before valid_to when both are set
    """

    id: TourPricingId
    participant_type: ParticipantType
    price: Money
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_active: bool = True
    is_default: bool = False
    discount_percentage: float = 0.0
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.price.is_zero:
            raise ValidationError("Price must be greater than zero", field="price")
        if not 0 <= self.discount_percentage <= 100:
            raise ValidationError(
                "Discount percentage must be between 0 and 100",
                field="discount_percentage",
                value=self.discount_percentage,
            )
        if self.valid_from and self.valid_to and self.valid_from >= self.valid_to:
            raise ValidationError("valid_from must be before valid_to", field="valid_from")

    @property
    def effective_price(self) -> Money:
        return self.price.apply_discount(self.discount_percentage)

    def is_valid_on(self, moment: datetime) -> bool:
        if not self.is_active:
            return False
        if self.valid_from is not None and moment < self.valid_from:
            return False
        return self.valid_to is None or moment <= self.valid_to


@dataclass
class Tour(AggregateRoot[TourId]):
    """
    A recreational tour members can reserve seats on.

    Business Rules:
    - Title is required (max MAX_TITLE_LENGTH characters)
    - Tour start must be before tour end
    - Age limits satisfy 0 <= min_age <= max_age
    - Guests per reservation are limited to 0..MAX_GUESTS_LIMIT
    - Registration of every capacity ends no later than the tour starts
    - Active capacities never have overlapping registration windows
    - At most one active default pricing per participant type
    - A tour cannot restrict itself
    """

    id: TourId
    title: str
    tour_start: datetime
    tour_end: datetime
    description: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    max_guests_per_reservation: int = 0
    is_active: bool = True
    status: TourStatus = TourStatus.DRAFT
    required_capabilities: list[str] = field(default_factory=list)
    required_features: list[str] = field(default_factory=list)
    required_agencies: list[int] = field(default_factory=list)
    restricted_tour_ids: list[int] = field(default_factory=list)
    capacities: list[TourCapacity] = field(default_factory=list)
    pricing: list[TourPricing] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Title cannot be empty", field="title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        if self.tour_start >= self.tour_end:
            raise ValidationError("Tour start must be before tour end", field="tour_start")
        if self.min_age is not None and self.min_age < 0:
            raise ValidationError("Minimum age cannot be negative", field="min_age")
        if self.max_age is not None and self.max_age < 0:
            raise ValidationError("Maximum age cannot be negative", field="max_age")
        if self.min_age is not None and self.max_age is not None and self.min_age > self.max_age:
            raise ValidationError("Minimum age cannot exceed maximum age", field="min_age")
        if not 0 <= self.max_guests_per_reservation <= MAX_GUESTS_LIMIT:
            raise ValidationError(
                f"Guests per reservation must be between 0 and {MAX_GUESTS_LIMIT}",
                field="max_guests_per_reservation",
            )
        if self.id.value and self.id.value in self.restricted_tour_ids:
            raise ValidationError("A tour cannot restrict itself", field="restricted_tour_ids")

    def _ensure_editable(self) -> None:
        if self.status in _CLOSED_STATUSES:
            raise BusinessRuleViolationError(
                "tour_not_editable", f"Tour in status {self.status} cannot be changed"
            )

    @property
    def active_capacities(self) -> list[TourCapacity]:
        return [capacity for capacity in self.capacities if capacity.is_active]

    @property
    def max_participants(self) -> int:
        return sum(capacity.max_participants for capacity in self.active_capacities)

    def get_capacity(self, capacity_id: TourCapacityId) -> TourCapacity | None:
        return next((c for c in self.capacities if c.id == capacity_id), None)

    def add_capacity(
        self,
        max_participants: int,
        registration_start: datetime,
        registration_end: datetime,
        description: str | None = None,
        min_participants_per_reservation: int = 1,
        max_participants_per_reservation: int = DEFAULT_MAX_PARTICIPANTS_PER_RESERVATION,
        is_active: bool = True,
    ) -> TourCapacity:
        """
        Add a registration window.

        Raises:
            ValidationError: If the window ends after the tour starts
            BusinessRuleViolationError: If it overlaps another active window
        """
        self._ensure_editable()
        capacity = TourCapacity(
            id=TourCapacityId.generate(),
            max_participants=max_participants,
            registration_start=registration_start,
            registration_end=registration_end,
            is_active=is_active,
            description=description,
            min_participants_per_reservation=min_participants_per_reservation,
            max_participants_per_reservation=max_participants_per_reservation,
        )
        if capacity.registration_end > self.tour_start:
            raise ValidationError(
                "Registration must end before the tour starts", field="registration_end"
            )
        if capacity.is_active and any(
            capacity.overlaps_with(other) for other in self.active_capacities
        ):
            raise BusinessRuleViolationError(
                "capacity_overlap", "Registration window overlaps an existing active capacity"
            )
        self.capacities.append(capacity)
        return capacity

    def add_pricing(
        self,
        participant_type: ParticipantType,
        price: Money,
        valid_from: datetime | None = None,
        valid_to: datetime | None = None,
        is_default: bool = False,
        discount_percentage: float = 0.0,
        description: str | None = None,
    ) -> TourPricing:
        self._ensure_editable()
        pricing = TourPricing(
            id=TourPricingId.generate(),
            participant_type=participant_type,
            price=price,
            valid_from=valid_from,
            valid_to=valid_to,
            is_default=is_default,
            discount_percentage=discount_percentage,
            description=description,
        )
        if is_default and any(
            p.is_active and p.is_default and p.participant_type == participant_type
            for p in self.pricing
        ):
            raise BusinessRuleViolationError(
                "single_default_pricing",
                f"An active default pricing already exists for {participant_type}",
            )
        self.pricing.append(pricing)
        return pricing

    def get_pricing(self, participant_type: ParticipantType, on: datetime) -> TourPricing | None:
        """Specific pricing valid on ``on`` wins over the default pricing."""
        valid = [
            p for p in self.pricing if p.participant_type == participant_type and p.is_valid_on(on)
        ]
        specific = [p for p in valid if not p.is_default]
        if specific:
            return specific[0]
        return next((p for p in valid if p.is_default), None)

    def transition_to(self, target: TourStatus) -> None:
        TourStateMachine.ensure_can_transition(self.status, target)
        self.status = target

    def publish(self, now: datetime) -> None:
        """Open registration once the tour is sellable."""
        if not self.is_active:
            raise BusinessRuleViolationError(
                "publish_inactive", "Inactive tour cannot be published"
            )
        if not self.active_capacities:
            raise BusinessRuleViolationError(
                "publish_requires_capacity", "Tour needs at least one active capacity"
            )
        if self.get_pricing(ParticipantType.MEMBER, now) is None:
            raise BusinessRuleViolationError(
                "publish_requires_pricing", "Tour needs active pricing for members"
            )
        self.transition_to(TourStatus.REGISTRATION_OPEN)

    def close_registration(self) -> None:
        self.transition_to(TourStatus.REGISTRATION_CLOSED)

    def is_registration_open(self, now: datetime) -> bool:
        if self.status != TourStatus.REGISTRATION_OPEN or not self.is_active:
            return False
        return any(capacity.is_registration_open(now) for capacity in self.active_capacities)

    def is_age_allowed(self, birth_date: date) -> bool:
        """Age limits are evaluated on the tour start date."""
        if self.min_age is None and self.max_age is None:
            return True
        age = age_on(birth_date, self.tour_start.date())
        if self.min_age is not None and age < self.min_age:
            return False
        return self.max_age is None or age <= self.max_age

    def restricts(self, tour_id: int) -> bool:
        return tour_id in self.restricted_tour_ids

    @classmethod
    def create(
        cls,
        title: str,
        tour_start: datetime,
        tour_end: datetime,
        description: str | None = None,
        min_age: int | None = None,
        max_age: int | None = None,
        max_guests_per_reservation: int = 0,
        required_capabilities: list[str] | None = None,
        required_features: list[str] | None = None,
        required_agencies: list[int] | None = None,
        restricted_tour_ids: list[int] | None = None,
    ) -> "Tour":
        """Create a new draft tour (ID will be 0 until persisted)."""
        return cls(
            id=TourId.generate(),
            title=title.strip(),
            tour_start=tour_start,
            tour_end=tour_end,
            description=description,
            min_age=min_age,
            max_age=max_age,
            max_guests_per_reservation=max_guests_per_reservation,
            required_capabilities=list(required_capabilities or []),
            required_features=list(required_features or []),
            required_agencies=sorted(set(required_agencies or [])),
            restricted_tour_ids=sorted(set(restricted_tour_ids or [])),
        )
