"""Expire holds whose time ran out."""

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.recreation.protocols import ReservationRepositoryProtocol
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExpireReservationsCommand(Command):
    now: datetime | None = None


@dataclass(frozen=True)
class ExpireReservationsResult:
    expired_count: int
    tracking_codes: list[str] = field(default_factory=list)


class ExpireReservationsHandler(
    CommandHandler[ExpireReservationsCommand, ExpireReservationsResult]
):
    def __init__(
        self, reservation_repository: ReservationRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.reservation_repository = reservation_repository
        self.uow = uow

    def handle(self, command: ExpireReservationsCommand) -> ExpireReservationsResult:
        now = command.now or utc_now()
        tracking_codes: list[str] = []

        with self.uow:
            for reservation in self.reservation_repository.find_expired_holds(now):
                reservation.mark_as_expired(now)
                saved = self.reservation_repository.save(reservation)
                # Events live on the instance that recorded them
                self.uow.track(reservation)
                tracking_codes.append(saved.tracking_code)
            self.uow.commit()

        if tracking_codes:
            logger.info(
                "reservations_expired",
                count=len(tracking_codes),
                tracking_codes=tracking_codes,
            )
        return ExpireReservationsResult(
            expired_count=len(tracking_codes), tracking_codes=tracking_codes
        )
