"""
Base class for value objects.

Refahi's value objects (``Money``, ``NationalId``, ``PhoneNumber`` and the
typed ids) are frozen dataclasses: equality and hashing come from their
fields, and each one validates itself in ``__post_init__`` so an invalid
instance never exists.

Example:
    @dataclass(frozen=True)
    class PostalCode(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if len(self.value) != 10 or not self.value.isdigit():
                raise ValidationError("Postal code must be 10 digits", field="postal_code")
"""


class ValueObject:
    """Marker base for immutable, self-validating domain values."""

    __slots__ = ()
