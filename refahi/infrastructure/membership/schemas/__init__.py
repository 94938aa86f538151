from .member_schemas import (
    MemberDetail,
    MemberResponse,
    RegisterMemberRequest,
    UpdateMemberRequest,
)

__all__ = ["MemberDetail", "MemberResponse", "RegisterMemberRequest", "UpdateMemberRequest"]
