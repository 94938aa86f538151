"""Tests for NationalId value object."""

import pytest

from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_objects import NationalId


class TestNationalId:
    """Test suite for NationalId value object."""

    @pytest.mark.parametrize("code", ["1234567891", "0012345679", "9876543210"])
    def test_valid_codes(self, code: str) -> None:
        assert NationalId(code).value == code

    def test_short_codes_are_left_padded(self) -> None:
        assert NationalId("12345679").value == "0012345679"
        assert NationalId("012345679").value == "0012345679"

    def test_whitespace_is_stripped(self) -> None:
        assert NationalId(" 1234567891 ").value == "1234567891"

    def test_wrong_check_digit(self) -> None:
        with pytest.raises(ValidationError):
            NationalId("1234567890")

    def test_repeated_digit_is_rejected(self) -> None:
        # 1111111111 passes the checksum but is a known placeholder
        with pytest.raises(ValidationError):
            NationalId("1111111111")

    @pytest.mark.parametrize("code", ["", "1234567", "12345678901", "12345abc91"])
    def test_malformed_codes(self, code: str) -> None:
        with pytest.raises(ValidationError):
            NationalId(code)

    def test_is_valid(self) -> None:
        assert NationalId.is_valid("1234567891")
        assert not NationalId.is_valid("1234567890")

    def test_equality(self) -> None:
        assert NationalId("12345679") == NationalId("0012345679")

    @pytest.mark.parametrize("code", ["12345678¹1", "۱۲۳۴۵۶۷۸۹۱"])
    def test_non_ascii_digits_are_rejected(self, code: str) -> None:
        # Superscript and Persian digits satisfy str.isdigit()
        with pytest.raises(ValidationError):
            NationalId(code)
        assert not NationalId.is_valid(code)
