"""Statuses and categories used by the facilities module."""

from enum import StrEnum


class FacilityType(StrEnum):
    LOAN = "Loan"
    GRANT = "Grant"
    CARD = "Card"


class FacilityStatus(StrEnum):
    DRAFT = "Draft"
    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    CLOSED = "Closed"


class FacilityCycleStatus(StrEnum):
    DRAFT = "Draft"
    ACTIVE = "Active"
    CLOSED = "Closed"
    UNDER_REVIEW = "UnderReview"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class FacilityRequestStatus(StrEnum):
    PENDING_APPROVAL = "PendingApproval"
    UNDER_REVIEW = "UnderReview"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


# Requests in these statuses do not use up cycle quota
QUOTA_FREE_REQUEST_STATUSES = frozenset(
    {FacilityRequestStatus.CANCELLED, FacilityRequestStatus.REJECTED}
)
