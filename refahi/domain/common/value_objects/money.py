"""Money value object for amounts in Iranian rials."""

from dataclasses import dataclass
from typing import Self

from ..exceptions import ValidationError
from ..value_object import ValueObject


@dataclass(frozen=True)
class Money(ValueObject):
    """
    A non-negative amount of money in rials.

    Rials have no fractional unit, so amounts are whole integers and every
    operation rounds down.
    """

    amount_rials: int

    def __post_init__(self) -> None:
        if self.amount_rials < 0:
            raise ValidationError(
                "Amount cannot be negative", field="amount", value=self.amount_rials
            )

    @classmethod
    def zero(cls) -> Self:
        return cls(0)

    @property
    def is_zero(self) -> bool:
        return self.amount_rials == 0

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount_rials + other.amount_rials)

    def __sub__(self, other: "Money") -> "Money":
        if other.amount_rials > self.amount_rials:
            raise ValidationError("Resulting amount cannot be negative", field="amount")
        return Money(self.amount_rials - other.amount_rials)

    def __lt__(self, other: "Money") -> bool:
        return self.amount_rials < other.amount_rials

    def __le__(self, other: "Money") -> bool:
        return self.amount_rials <= other.amount_rials

    def __gt__(self, other: "Money") -> bool:
        return self.amount_rials > other.amount_rials

    def __ge__(self, other: "Money") -> bool:
        return self.amount_rials >= other.amount_rials

    def multiply(self, factor: int) -> "Money":
        """Multiply by a whole, non-negative factor such as a participant count."""
        if factor < 0:
            raise ValidationError("Factor cannot be negative", field="factor", value=factor)
        return Money(self.amount_rials * factor)

    def apply_discount(self, percentage: float) -> "Money":
        """Return the amount after subtracting ``percentage`` percent, rounded down."""
        if percentage < 0 or percentage > 100:
            raise ValidationError(
                "Discount percentage must be between 0 and 100",
                field="discount_percentage",
                value=percentage,
            )
        discount = int(self.amount_rials * percentage / 100)
        return Money(self.amount_rials - discount)

    def __str__(self) -> str:
        return f"{self.amount_rials:,} IRR"
