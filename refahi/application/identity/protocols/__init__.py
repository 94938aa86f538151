from .otp_challenge_repository import OtpChallengeRepositoryProtocol
from .otp_service import OtpServiceProtocol
from .token_service import TokenPair, TokenServiceProtocol
from .user_repository import UserRepositoryProtocol

__all__ = [
    "OtpChallengeRepositoryProtocol",
    "OtpServiceProtocol",
    "TokenPair",
    "TokenServiceProtocol",
    "UserRepositoryProtocol",
]
