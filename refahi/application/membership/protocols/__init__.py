from .member_info_provider import MemberInfoProviderProtocol
from .member_repository import MemberRepositoryProtocol

__all__ = ["MemberInfoProviderProtocol", "MemberRepositoryProtocol"]
