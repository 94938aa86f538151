"""Mobile phone number value object."""

import re
from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject

_MOBILE_PATTERN = re.compile(r"^09\d{9}$")


@dataclass(frozen=True)
class PhoneNumber(ValueObject):
    """An Iranian mobile number normalized to the ``09xxxxxxxxx`` form."""

    value: str

    def __post_init__(self) -> None:
        normalized = re.sub(r"[\s-]", "", self.value or "")
        if normalized.startswith("+98"):
            normalized = "0" + normalized[3:]
        elif normalized.startswith("0098"):
            normalized = "0" + normalized[4:]
        elif normalized.startswith("9") and len(normalized) == 10:
            normalized = "0" + normalized
        if not _MOBILE_PATTERN.match(normalized):
            raise ValidationError(
                "Phone number must be a valid mobile number", field="phone_number", value=self.value
            )
        object.__setattr__(self, "value", normalized)

    @property
    def masked(self) -> str:
        """The number with its middle digits hidden, for logs."""
        return f"{self.value[:4]}***{self.value[-4:]}"

    def __str__(self) -> str:
        return self.value
