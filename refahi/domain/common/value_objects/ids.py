from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""

    value: int


@dataclass(frozen=True)
class OtpChallengeId(EntityId):
    """Strongly-typed one-time password challenge identifier."""

    value: int


@dataclass(frozen=True)
class MemberId(EntityId):
    """Strongly-typed member identifier."""

    value: int


@dataclass(frozen=True)
class TourId(EntityId):
    """Strongly-typed tour identifier."""

    value: int


@dataclass(frozen=True)
class TourCapacityId(EntityId):
    """Strongly-typed tour capacity identifier."""

    value: int


@dataclass(frozen=True)
class TourPricingId(EntityId):
    """Strongly-typed tour pricing identifier."""

    value: int


@dataclass(frozen=True)
class ReservationId(EntityId):
    """Strongly-typed tour reservation identifier."""

    value: int


@dataclass(frozen=True)
class ParticipantId(EntityId):
    """Strongly-typed reservation participant identifier."""

    value: int


@dataclass(frozen=True)
class BillId(EntityId):
    """Strongly-typed bill identifier."""

    value: int


@dataclass(frozen=True)
class BillItemId(EntityId):
    """Strongly-typed bill item identifier."""

    value: int


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Strongly-typed payment identifier."""

    value: int


@dataclass(frozen=True)
class RefundId(EntityId):
    """Strongly-typed refund identifier."""

    value: int


@dataclass(frozen=True)
class WalletId(EntityId):
    """Strongly-typed wallet identifier."""

    value: int


@dataclass(frozen=True)
class WalletTransactionId(EntityId):
    """Strongly-typed wallet transaction identifier."""

    value: int


@dataclass(frozen=True)
class FacilityId(EntityId):
    """Strongly-typed facility identifier."""

    value: int


@dataclass(frozen=True)
class FacilityCycleId(EntityId):
    """Strongly-typed facility cycle identifier."""

    value: int


@dataclass(frozen=True)
class FacilityRequestId(EntityId):
    """Strongly-typed facility request identifier."""

    value: int


@dataclass(frozen=True)
class SurveyId(EntityId):
    """Strongly-typed survey identifier."""

    value: int


@dataclass(frozen=True)
class QuestionId(EntityId):
    """Strongly-typed survey question identifier."""

    value: int


@dataclass(frozen=True)
class QuestionOptionId(EntityId):
    """Strongly-typed question option identifier."""

    value: int


@dataclass(frozen=True)
class SurveyResponseId(EntityId):
    """Strongly-typed survey response identifier."""

    value: int
