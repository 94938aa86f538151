"""One-time password generation and hashing."""

import secrets

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from refahi.config import get_settings

settings = get_settings()
OTP_PEPPER = settings.OTP_PEPPER

code_hash = PasswordHash.recommended()


def generate_numeric_code(length: int) -> str:
    """Generate a random code of ``length`` decimal digits."""
    return "".join(secrets.choice("0123456789") for _ in range(length))


def hash_code(code: str) -> str:
    """Hash a code for storage with pepper."""
    return code_hash.hash(code + OTP_PEPPER)


def verify_code(code: str, hashed_code: str) -> bool:
    """Verify a plain code against its stored hash."""
    try:
        return code_hash.verify(code + OTP_PEPPER, hashed_code)
    except UnknownHashError:
        return False
