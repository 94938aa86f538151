"""Rules for how often a member may answer a survey."""

from dataclasses import dataclass
from datetime import datetime

from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_object import ValueObject


@dataclass(frozen=True)
class ParticipationPolicy(ValueObject):
    """
    Attempt limits of a survey.

    Attempts are numbered from 1. A cool-down, when set, is the minimum
    number of seconds between the end of one attempt and the next.
    """

    max_attempts_per_member: int = 1
    allow_multiple_submissions: bool = False
    cool_down_seconds: int | None = None

    def __post_init__(self) -> None:
        if self.max_attempts_per_member <= 0:
            raise ValidationError(
                "Max attempts per member must be greater than zero",
                field="max_attempts_per_member",
            )
        if self.cool_down_seconds is not None and self.cool_down_seconds < 0:
            raise ValidationError(
                "Cool-down seconds cannot be negative", field="cool_down_seconds"
            )

    def is_attempt_allowed(self, attempt_number: int) -> bool:
        return 0 <= attempt_number <= self.max_attempts_per_member

    def is_cool_down_passed(self, last_attempt_at: datetime | None, now: datetime) -> bool:
        if self.cool_down_seconds is None or last_attempt_at is None:
            return True
        return (now - last_attempt_at).total_seconds() >= self.cool_down_seconds
