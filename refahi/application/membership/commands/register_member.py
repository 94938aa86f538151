"""Register a member in the association's registry."""

from dataclasses import dataclass, field
from datetime import date, datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.membership.protocols import MemberRepositoryProtocol
from refahi.domain.common.value_objects import NationalId, PhoneNumber
from refahi.domain.membership.entities.member import Member
from refahi.domain.membership.exceptions import DuplicateMemberError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RegisterMemberCommand(Command):
    membership_number: str
    national_code: str
    first_name: str
    last_name: str
    membership_start: datetime
    membership_end: datetime | None = None
    phone_number: str | None = None
    email: str | None = None
    birth_date: date | None = None
    capabilities: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    agencies: list[int] = field(default_factory=list)


class RegisterMemberHandler(CommandHandler[RegisterMemberCommand, Member]):
    def __init__(self, member_repository: MemberRepositoryProtocol, uow: UnitOfWork) -> None:
        self.member_repository = member_repository
        self.uow = uow

    def handle(self, command: RegisterMemberCommand) -> Member:
        national_code = NationalId(command.national_code)
        membership_number = command.membership_number.strip()

        if self.member_repository.national_code_exists(national_code):
            raise DuplicateMemberError("national code", national_code.value)
        if self.member_repository.membership_number_exists(membership_number):
            raise DuplicateMemberError("membership number", membership_number)

        with self.uow:
            member = Member.register(
                membership_number=membership_number,
                national_code=national_code,
                first_name=command.first_name,
                last_name=command.last_name,
                membership_start=command.membership_start,
                membership_end=command.membership_end,
                phone_number=PhoneNumber(command.phone_number) if command.phone_number else None,
                email=command.email,
                birth_date=command.birth_date,
                capabilities=command.capabilities,
                features=command.features,
                agencies=command.agencies,
            )
            member = self.member_repository.save(member)
            self.uow.commit()

        logger.info(
            "member_registered",
            member_id=member.id.value,
            membership_number=member.membership_number,
        )
        return member
