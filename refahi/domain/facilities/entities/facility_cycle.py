"""Facility cycle aggregate: one application round of a facility."""

from dataclasses import dataclass
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import FacilityCycleId, FacilityId, Money
from refahi.domain.facilities.enums import FacilityCycleStatus


@dataclass
class FacilityCycle(AggregateRoot[FacilityCycleId]):
    """
    A time-boxed round in which members request a facility.

    Business Rules:
    - Start date is before end date
    - Quota and payment months are greater than zero
    - Minimum amount does not exceed maximum amount
    - Interest rate is a fraction between 0 and 1
    """

    id: FacilityCycleId
    facility_id: FacilityId
    name: str
    start_date: datetime
    end_date: datetime
    quota: int
    min_amount: Money
    max_amount: Money
    payment_months: int = 12
    interest_rate: float = 0.0
    status: FacilityCycleStatus = FacilityCycleStatus.DRAFT
    description: str | None = None
    approval_message: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("Cycle name cannot be empty", field="name")
        if self.start_date >= self.end_date:
            raise ValidationError("Start date must be before end date", field="start_date")
        if self.quota <= 0:
            raise ValidationError("Quota must be greater than zero", field="quota")
        if self.min_amount > self.max_amount:
            raise ValidationError(
                "Minimum amount cannot exceed maximum amount", field="min_amount"
            )
        if self.payment_months <= 0:
            raise ValidationError(
                "Payment months must be greater than zero", field="payment_months"
            )
        if not 0 <= self.interest_rate <= 1:
            raise ValidationError("Interest rate must be between 0 and 1", field="interest_rate")

    def is_accepting_requests(self, now: datetime) -> bool:
        return self.status == FacilityCycleStatus.ACTIVE and self.start_date <= now <= self.end_date

    def is_amount_allowed(self, amount: Money) -> bool:
        return self.min_amount <= amount <= self.max_amount

    def activate(self) -> None:
        if self.status != FacilityCycleStatus.DRAFT:
            raise BusinessRuleViolationError(
                "activate_requires_draft", f"Cycle in status {self.status} cannot be activated"
            )
        self.status = FacilityCycleStatus.ACTIVE

    def close(self) -> None:
        if self.status != FacilityCycleStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "close_requires_active", "Only an active cycle can be closed"
            )
        self.status = FacilityCycleStatus.CLOSED

    def cancel(self) -> None:
        if self.status == FacilityCycleStatus.COMPLETED:
            raise BusinessRuleViolationError(
                "cancel_completed_cycle", "A completed cycle cannot be cancelled"
            )
        self.status = FacilityCycleStatus.CANCELLED

    @classmethod
    def create(
        cls,
        facility_id: FacilityId,
        name: str,
        start_date: datetime,
        end_date: datetime,
        quota: int,
        min_amount: Money,
        max_amount: Money,
        payment_months: int = 12,
        interest_rate: float = 0.0,
        description: str | None = None,
        approval_message: str | None = None,
    ) -> "FacilityCycle":
        """Create a new draft cycle (ID will be 0 until persisted)."""
        return cls(
            id=FacilityCycleId.generate(),
            facility_id=facility_id,
            name=name.strip(),
            start_date=start_date,
            end_date=end_date,
            quota=quota,
            min_amount=min_amount,
            max_amount=max_amount,
            payment_months=payment_months,
            interest_rate=interest_rate,
            description=description,
            approval_message=approval_message,
        )
