"""Tests for the table-driven state machine."""

import pytest

from refahi.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStateTransitionError,
)
from refahi.domain.recreation.enums import ReservationStatus
from refahi.domain.recreation.services.state_machines import ReservationStateMachine


class TestReservationStateMachine:
    def test_allowed_transition(self) -> None:
        assert ReservationStateMachine.can_transition(
            ReservationStatus.DRAFT, ReservationStatus.ON_HOLD
        )
        ReservationStateMachine.ensure_can_transition(
            ReservationStatus.ON_HOLD, ReservationStatus.CONFIRMED
        )

    def test_refused_transition(self) -> None:
        assert not ReservationStateMachine.can_transition(
            ReservationStatus.DRAFT, ReservationStatus.CONFIRMED
        )
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            ReservationStateMachine.ensure_can_transition(
                ReservationStatus.CANCELLED, ReservationStatus.ON_HOLD
            )
        # State machine refusals are business rule violations
        assert isinstance(exc_info.value, BusinessRuleViolationError)

    def test_terminal_states(self) -> None:
        assert ReservationStateMachine.is_terminal(ReservationStatus.CANCELLED)
        assert ReservationStateMachine.is_terminal(ReservationStatus.REFUNDED)
        assert not ReservationStateMachine.is_terminal(ReservationStatus.EXPIRED)

    def test_expired_can_be_reactivated(self) -> None:
        assert ReservationStatus.ON_HOLD in ReservationStateMachine.allowed_targets(
            ReservationStatus.EXPIRED
        )
