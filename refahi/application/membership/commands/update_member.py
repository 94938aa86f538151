"""Update a member's profile, tags and membership period."""

from dataclasses import dataclass
from datetime import date, datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.membership.protocols import MemberRepositoryProtocol
from refahi.domain.common.value_objects import MemberId, PhoneNumber
from refahi.domain.membership.entities.member import Member
from refahi.exceptions import MemberNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UpdateMemberCommand(Command):
    """Fields left as None keep their current value."""

    member_id: int
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    birth_date: date | None = None
    capabilities: list[str] | None = None
    features: list[str] | None = None
    agencies: list[int] | None = None
    membership_start: datetime | None = None
    membership_end: datetime | None = None
    is_active: bool | None = None


class UpdateMemberHandler(CommandHandler[UpdateMemberCommand, Member]):
    def __init__(self, member_repository: MemberRepositoryProtocol, uow: UnitOfWork) -> None:
        self.member_repository = member_repository
        self.uow = uow

    def handle(self, command: UpdateMemberCommand) -> Member:
        with self.uow:
            member = self.member_repository.find_by_id(MemberId(command.member_id))
            if member is None:
                raise MemberNotFoundError(command.member_id)

            member.update_profile(
                first_name=command.first_name,
                last_name=command.last_name,
                phone_number=PhoneNumber(command.phone_number) if command.phone_number else None,
                email=command.email,
                birth_date=command.birth_date,
            )
            if command.capabilities is not None:
                member.set_capabilities(command.capabilities)
            if command.features is not None:
                member.set_features(command.features)
            if command.agencies is not None:
                member.set_agencies(command.agencies)
            if command.membership_start is not None or command.membership_end is not None:
                member.change_membership_period(
                    command.membership_start or member.membership_start,
                    command.membership_end or member.membership_end,
                )
            if command.is_active is True:
                member.activate()
            elif command.is_active is False:
                member.deactivate()

            member = self.member_repository.save(member)
            self.uow.commit()

        logger.info("member_updated", member_id=member.id.value)
        return member
