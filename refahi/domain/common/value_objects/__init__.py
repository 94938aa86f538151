"""Common value objects shared across all domain modules."""

from .ids import (
    UserId,
    OtpChallengeId,
    MemberId,
    TourId,
    TourCapacityId,
    TourPricingId,
    ReservationId,
    ParticipantId,
    BillId,
    BillItemId,
    PaymentId,
    RefundId,
    WalletId,
    WalletTransactionId,
    FacilityId,
    FacilityCycleId,
    FacilityRequestId,
    SurveyId,
    QuestionId,
    QuestionOptionId,
    SurveyResponseId,
)
from .money import Money
from .national_id import NationalId
from .phone_number import PhoneNumber

__all__ = [
    "BillId",
    "BillItemId",
    "FacilityCycleId",
    "FacilityId",
    "FacilityRequestId",
    "MemberId",
    "Money",
    "NationalId",
    "OtpChallengeId",
    "ParticipantId",
    "PaymentId",
    "PhoneNumber",
    "QuestionId",
    "QuestionOptionId",
    "RefundId",
    "ReservationId",
    "SurveyId",
    "SurveyResponseId",
    "TourCapacityId",
    "TourId",
    "TourPricingId",
    "UserId",
    "WalletId",
    "WalletTransactionId",
]
