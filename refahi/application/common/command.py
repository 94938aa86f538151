"""
Commands and their handlers.

A command is a frozen request to change state (``HoldReservation``,
``CompletePayment``). Its handler loads aggregates through repository
protocols, lets them enforce their rules, saves them inside the unit of work
and commits; recorded events are published after the commit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

TCommand = TypeVar("TCommand", bound="Command")
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Command:
    """Input of a state-changing use case, already validated by the router."""


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Executes exactly one command type."""

    @abstractmethod
    def handle(self, command: TCommand) -> TResult:
        """
        Apply the command.

        Raises:
            DomainError: When a business rule refuses the change
            RefahiError: When the caller may not perform it
        """
        raise NotImplementedError
