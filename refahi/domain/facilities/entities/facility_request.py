"""Facility request aggregate: a member's application in a cycle."""

import random
from dataclasses import dataclass
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import (
    FacilityCycleId,
    FacilityId,
    FacilityRequestId,
    MemberId,
    Money,
    NationalId,
)
from refahi.domain.facilities.enums import FacilityRequestStatus


def generate_request_number(now: datetime, rng: random.Random | None = None) -> str:
    return f"FR-{now:%Y%m%d%H%M%S}{(rng or random).randint(100, 999)}"


@dataclass
class FacilityRequest(AggregateRoot[FacilityRequestId]):
    """
    A member's request for a facility within a cycle.

    Business Rules:
    - Requested amount is greater than zero
    - Review starts from PendingApproval; approval and rejection need UnderReview
    - Rejection requires a reason
    - Only pending or in-review requests can be cancelled
    """

    id: FacilityRequestId
    facility_id: FacilityId
    cycle_id: FacilityCycleId
    member_id: MemberId
    national_code: NationalId
    member_full_name: str
    requested_amount: Money
    request_number: str
    status: FacilityRequestStatus = FacilityRequestStatus.PENDING_APPROVAL
    approved_amount: Money | None = None
    description: str | None = None
    rejection_reason: str | None = None
    review_notes: str | None = None
    idempotency_key: str | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.requested_amount.is_zero:
            raise ValidationError(
                "Requested amount must be greater than zero", field="requested_amount"
            )

    @property
    def final_amount(self) -> Money:
        return self.approved_amount or self.requested_amount

    @property
    def is_active(self) -> bool:
        return self.status in (
            FacilityRequestStatus.PENDING_APPROVAL,
            FacilityRequestStatus.UNDER_REVIEW,
            FacilityRequestStatus.APPROVED,
        )

    def start_review(self) -> None:
        if self.status != FacilityRequestStatus.PENDING_APPROVAL:
            raise BusinessRuleViolationError(
                "review_requires_pending", "Only pending requests can be reviewed"
            )
        self.status = FacilityRequestStatus.UNDER_REVIEW

    def approve(self, approved_amount: Money, now: datetime, notes: str | None = None) -> None:
        if self.status != FacilityRequestStatus.UNDER_REVIEW:
            raise BusinessRuleViolationError(
                "approve_requires_review", "Only requests under review can be approved"
            )
        if approved_amount.is_zero:
            raise ValidationError(
                "Approved amount must be greater than zero", field="approved_amount"
            )
        self.status = FacilityRequestStatus.APPROVED
        self.approved_amount = approved_amount
        self.approved_at = now
        self.review_notes = notes

    def reject(self, reason: str, now: datetime) -> None:
        if self.status != FacilityRequestStatus.UNDER_REVIEW:
            raise BusinessRuleViolationError(
                "reject_requires_review", "Only requests under review can be rejected"
            )
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required", field="reason")
        self.status = FacilityRequestStatus.REJECTED
        self.rejection_reason = reason.strip()
        self.rejected_at = now

    def cancel(self, now: datetime, reason: str | None = None) -> None:
        if self.status not in (
            FacilityRequestStatus.PENDING_APPROVAL,
            FacilityRequestStatus.UNDER_REVIEW,
        ):
            raise BusinessRuleViolationError(
                "cancel_requires_pending", f"Request in status {self.status} cannot be cancelled"
            )
        self.status = FacilityRequestStatus.CANCELLED
        self.cancelled_at = now
        if reason:
            self.review_notes = reason

    @classmethod
    def submit(
        cls,
        facility_id: FacilityId,
        cycle_id: FacilityCycleId,
        member_id: MemberId,
        national_code: NationalId,
        member_full_name: str,
        requested_amount: Money,
        now: datetime,
        description: str | None = None,
        idempotency_key: str | None = None,
    ) -> "FacilityRequest":
        """Create a new pending request (ID will be 0 until persisted)."""
        return cls(
            id=FacilityRequestId.generate(),
            facility_id=facility_id,
            cycle_id=cycle_id,
            member_id=member_id,
            national_code=national_code,
            member_full_name=member_full_name,
            requested_amount=requested_amount,
            request_number=generate_request_number(now),
            description=description,
            idempotency_key=idempotency_key,
            created_at=now,
        )
