"""Tests for PhoneNumber value object."""

import pytest

from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_objects import PhoneNumber


class TestPhoneNumber:
    @pytest.mark.parametrize(
        "raw",
        ["09121234567", "+989121234567", "00989121234567", "9121234567", "0912 123-4567"],
    )
    def test_normalization(self, raw: str) -> None:
        assert PhoneNumber(raw).value == "09121234567"

    @pytest.mark.parametrize("raw", ["", "0212345678", "0912123456", "not a number"])
    def test_invalid_numbers(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            PhoneNumber(raw)

    def test_masked(self) -> None:
        assert PhoneNumber("09121234567").masked == "0912***4567"
