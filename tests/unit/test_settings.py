"""Tests for application settings validation."""

import pytest
from pydantic import ValidationError

from refahi.config import Settings


class TestAdminNationalCodes:
    def test_codes_are_normalized(self) -> None:
        settings = Settings(ADMIN_NATIONAL_CODES=["12345679", " 1234567891 ", " "])
        assert settings.ADMIN_NATIONAL_CODES == ["0012345679", "1234567891"]

    def test_invalid_code_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(ADMIN_NATIONAL_CODES=["1234567890"])

    def test_production_requires_secret_key(self) -> None:
        with pytest.raises(ValidationError):
            Settings(ENVIRONMENT="production", SECRET_KEY="")
