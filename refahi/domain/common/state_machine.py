"""Table-driven state machine for aggregate statuses."""

from collections.abc import Mapping
from enum import StrEnum
from typing import Generic, TypeVar

from .exceptions import InvalidStateTransitionError

TState = TypeVar("TState", bound=StrEnum)


class StateMachine(Generic[TState]):
    """
    Allowed transitions between statuses of one aggregate type.

    States missing from the table are terminal.

    Example:
        machine = StateMachine("bill", {BillStatus.DRAFT: {BillStatus.ISSUED}})
        machine.ensure_can_transition(BillStatus.DRAFT, BillStatus.ISSUED)
    """

    def __init__(self, entity: str, transitions: Mapping[TState, set[TState]]) -> None:
        self.entity = entity
        self._transitions = {state: frozenset(targets) for state, targets in transitions.items()}

    def can_transition(self, current: TState, target: TState) -> bool:
        return target in self._transitions.get(current, frozenset())

    def ensure_can_transition(self, current: TState, target: TState) -> None:
        if not self.can_transition(current, target):
            raise InvalidStateTransitionError(self.entity, current.value, target.value)

    def allowed_targets(self, current: TState) -> frozenset[TState]:
        return self._transitions.get(current, frozenset())

    def is_terminal(self, state: TState) -> bool:
        return not self._transitions.get(state)
