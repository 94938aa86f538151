"""Submit a member's request in an active facility cycle."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.facilities.protocols import (
    FacilityCycleRepositoryProtocol,
    FacilityRepositoryProtocol,
    FacilityRequestRepositoryProtocol,
)
from refahi.application.membership.protocols import MemberInfoProviderProtocol
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import FacilityCycleId, MemberId, Money, NationalId
from refahi.domain.facilities.entities.facility_request import FacilityRequest
from refahi.domain.facilities.enums import FacilityCycleStatus, FacilityStatus
from refahi.domain.facilities.services.facility_eligibility_service import (
    FacilityEligibilityService,
)
from refahi.exceptions import (
    FacilityCycleNotFoundError,
    FacilityNotFoundError,
    MemberNotFoundError,
)
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateFacilityRequestCommand(Command):
    cycle_id: int
    national_code: str
    amount_rials: int
    description: str | None = None
    idempotency_key: str | None = None


class CreateFacilityRequestHandler(CommandHandler[CreateFacilityRequestCommand, FacilityRequest]):
    """
    Create a pending facility request.

    Checks run in order: member, active cycle, active facility, no other
    active request of the member in the cycle, eligibility, free quota.
    An idempotency key the member already used then returns their stored
    request, since keys are scoped per member. Finally the amount must fall
    within the cycle limits.
    """

    def __init__(
        self,
        facility_repository: FacilityRepositoryProtocol,
        cycle_repository: FacilityCycleRepositoryProtocol,
        request_repository: FacilityRequestRepositoryProtocol,
        member_info_provider: MemberInfoProviderProtocol,
        eligibility_service: FacilityEligibilityService,
        uow: UnitOfWork,
    ) -> None:
        self.facility_repository = facility_repository
        self.cycle_repository = cycle_repository
        self.request_repository = request_repository
        self.member_info_provider = member_info_provider
        self.eligibility_service = eligibility_service
        self.uow = uow

    def handle(self, command: CreateFacilityRequestCommand) -> FacilityRequest:
        member = self.member_info_provider.get_member_info(command.national_code)
        if member is None:
            raise MemberNotFoundError(message="Member not found")

        with self.uow:
            cycle = self.cycle_repository.find_by_id(FacilityCycleId(command.cycle_id))
            if cycle is None:
                raise FacilityCycleNotFoundError(command.cycle_id)
            if cycle.status != FacilityCycleStatus.ACTIVE:
                raise BusinessRuleViolationError(
                    "cycle_active", "The facility cycle is not active"
                )

            facility = self.facility_repository.find_by_id(cycle.facility_id)
            if facility is None:
                raise FacilityNotFoundError(cycle.facility_id.value)
            if facility.status != FacilityStatus.ACTIVE:
                raise BusinessRuleViolationError("facility_active", "The facility is not active")

            last = self.request_repository.find_last_for_member(
                cycle.id, MemberId(member.member_id)
            )
            if last is not None and last.is_active:
                logger.warning(
                    "duplicate_facility_request",
                    member_id=member.member_id,
                    cycle_id=command.cycle_id,
                    existing_status=last.status.value,
                )
                raise BusinessRuleViolationError(
                    "single_active_request",
                    "You already have an active request for this facility cycle",
                )

            eligibility = self.eligibility_service.check(
                facility, member.features, member.capabilities
            )
            if not eligibility.is_eligible:
                raise BusinessRuleViolationError(
                    "member_eligible",
                    "; ".join(eligibility.errors) or "You are not eligible for this facility",
                )

            if self.request_repository.count_quota_usage(cycle.id) >= cycle.quota:
                raise BusinessRuleViolationError(
                    "quota_available", "The facility cycle quota is full"
                )

            if command.idempotency_key:
                existing = self.request_repository.find_by_idempotency_key(
                    command.idempotency_key, MemberId(member.member_id)
                )
                if existing is not None:
                    logger.info(
                        "facility_request_replayed",
                        request_id=existing.id.value,
                        idempotency_key=command.idempotency_key,
                    )
                    return existing

            amount = Money(command.amount_rials)
            if not cycle.is_amount_allowed(amount):
                raise ValidationError(
                    f"Requested amount must be between {cycle.min_amount.amount_rials} "
                    f"and {cycle.max_amount.amount_rials} rials",
                    field="amount",
                )

            request = FacilityRequest.submit(
                facility_id=facility.id,
                cycle_id=cycle.id,
                member_id=MemberId(member.member_id),
                national_code=NationalId(member.national_code),
                member_full_name=member.full_name,
                requested_amount=amount,
                now=utc_now(),
                description=command.description,
                idempotency_key=command.idempotency_key,
            )
            request = self.request_repository.save(request)
            self.uow.commit()

        logger.info(
            "facility_request_created",
            request_id=request.id.value,
            request_number=request.request_number,
            facility_id=facility.id.value,
            member_id=member.member_id,
        )
        return request
