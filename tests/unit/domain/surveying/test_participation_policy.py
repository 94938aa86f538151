from datetime import UTC, datetime, timedelta

import pytest

from refahi.domain.common.exceptions import ValidationError
from refahi.domain.surveying.participation_policy import ParticipationPolicy

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def test_defaults_allow_single_attempt() -> None:
    policy = ParticipationPolicy()
    assert policy.is_attempt_allowed(1)
    assert not policy.is_attempt_allowed(2)
    assert not policy.allow_multiple_submissions


@pytest.mark.parametrize("attempts", [0, -1])
def test_max_attempts_must_be_positive(attempts: int) -> None:
    with pytest.raises(ValidationError):
        ParticipationPolicy(max_attempts_per_member=attempts)


def test_negative_cool_down() -> None:
    with pytest.raises(ValidationError):
        ParticipationPolicy(cool_down_seconds=-1)


def test_cool_down() -> None:
    policy = ParticipationPolicy(max_attempts_per_member=3, cool_down_seconds=600)
    last = NOW - timedelta(minutes=5)

    assert not policy.is_cool_down_passed(last, NOW)
    assert policy.is_cool_down_passed(last, NOW + timedelta(minutes=5))
    assert policy.is_cool_down_passed(None, NOW)
    assert ParticipationPolicy().is_cool_down_passed(last, NOW)
