"""Iranian national code value object."""

from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject

NATIONAL_ID_LENGTH = 10


@dataclass(frozen=True)
class NationalId(ValueObject):
    """
    A validated 10-digit Iranian national code.

    Codes with 8 or 9 digits are left-padded with zeros. The last digit is a
    check digit over the first nine, weighted 10 down to 2, modulo 11.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip()
        is_ascii_digits = normalized.isascii() and normalized.isdigit()
        if is_ascii_digits and 8 <= len(normalized) < NATIONAL_ID_LENGTH:
            normalized = normalized.zfill(NATIONAL_ID_LENGTH)
        # Frozen dataclass: store the normalized form
        object.__setattr__(self, "value", normalized)

        if len(normalized) != NATIONAL_ID_LENGTH or not is_ascii_digits:
            raise ValidationError(
                "National code must be 10 digits", field="national_code", value=self.value
            )
        if len(set(normalized)) == 1:
            raise ValidationError(
                "National code is not valid", field="national_code", value=self.value
            )
        if not self.has_valid_check_digit(normalized):
            raise ValidationError(
                "National code is not valid", field="national_code", value=self.value
            )

    @staticmethod
    def has_valid_check_digit(code: str) -> bool:
        total = sum(int(code[i]) * (NATIONAL_ID_LENGTH - i) for i in range(9))
        remainder = total % 11
        check = int(code[9])
        if remainder < 2:
            return check == remainder
        return check == 11 - remainder

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Return whether ``value`` is a valid national code without raising."""
        try:
            cls(value)
        except ValidationError:
            return False
        return True

    def __str__(self) -> str:
        return self.value
