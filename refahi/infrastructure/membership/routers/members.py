"""API routes for the member registry."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.membership.commands.register_member import (
    RegisterMemberCommand,
    RegisterMemberHandler,
)
from refahi.application.membership.commands.update_member import (
    UpdateMemberCommand,
    UpdateMemberHandler,
)
from refahi.application.membership.queries.get_member import (
    GetMemberByNationalCodeHandler,
    GetMemberByNationalCodeQuery,
    GetMemberHandler,
    GetMemberQuery,
)
from refahi.application.membership.queries.list_members import (
    ListMembersHandler,
    ListMembersQuery,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser
from refahi.infrastructure.membership.schemas import (
    MemberDetail,
    MemberResponse,
    RegisterMemberRequest,
    UpdateMemberRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["members"])


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def register_member(
    request: RegisterMemberRequest,
    _: CurrentAdmin,
    handler: RegisterMemberHandler = Depends(inject_handler(container.register_member_handler)),
) -> MemberResponse:
    """
    Register a new member.

    Raises:
        HTTPException 409: If the national code or membership number is taken
    """
    try:
        member = handler.handle(RegisterMemberCommand(**request.model_dump()))
        return MemberResponse(
            success=True,
            message="Member registered successfully",
            member=MemberDetail.from_domain(member),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to register member: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("", response_model=PaginatedResponse[MemberDetail])
def list_members(
    _: CurrentAdmin,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: str | None = Query(None, description="Name or national code"),
    handler: ListMembersHandler = Depends(inject_handler(container.list_members_handler)),
) -> PaginatedResponse[MemberDetail]:
    result = handler.handle(
        ListMembersQuery(pagination=Pagination(page=page, page_size=page_size), search=search)
    )
    return PaginatedResponse.from_result(
        result, [MemberDetail.from_domain(member) for member in result.items]
    )


@router.get("/me", response_model=MemberDetail)
def get_my_membership(
    current_user: CurrentUser,
    handler: GetMemberByNationalCodeHandler = Depends(
        inject_handler(container.get_member_by_national_code_handler)
    ),
) -> MemberDetail:
    """Return the membership record of the authenticated user."""
    member = handler.handle(
        GetMemberByNationalCodeQuery(national_code=current_user.national_code.value)
    )
    return MemberDetail.from_domain(member)


@router.get("/by-national-code/{national_code}", response_model=MemberDetail)
def get_member_by_national_code(
    national_code: str,
    _: CurrentAdmin,
    handler: GetMemberByNationalCodeHandler = Depends(
        inject_handler(container.get_member_by_national_code_handler)
    ),
) -> MemberDetail:
    member = handler.handle(GetMemberByNationalCodeQuery(national_code=national_code))
    return MemberDetail.from_domain(member)


@router.get("/{member_id}", response_model=MemberDetail)
def get_member(
    member_id: int,
    _: CurrentAdmin,
    handler: GetMemberHandler = Depends(inject_handler(container.get_member_handler)),
) -> MemberDetail:
    return MemberDetail.from_domain(handler.handle(GetMemberQuery(member_id=member_id)))


@router.patch("/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: int,
    request: UpdateMemberRequest,
    _: CurrentAdmin,
    handler: UpdateMemberHandler = Depends(inject_handler(container.update_member_handler)),
) -> MemberResponse:
    try:
        member = handler.handle(
            UpdateMemberCommand(member_id=member_id, **request.model_dump(exclude_unset=True))
        )
        return MemberResponse(
            success=True,
            message="Member updated successfully",
            member=MemberDetail.from_domain(member),
        )
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update member {member_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
