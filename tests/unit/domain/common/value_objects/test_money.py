"""Tests for Money value object."""

import pytest

from refahi.domain.common.exceptions import ValidationError
from refahi.domain.common.value_objects import Money


class TestMoney:
    def test_zero(self) -> None:
        assert Money.zero().is_zero
        assert not Money(1).is_zero

    def test_negative_amount_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Money(-1)

    def test_addition_and_subtraction(self) -> None:
        assert Money(1_000) + Money(500) == Money(1_500)
        assert Money(1_000) - Money(400) == Money(600)

    def test_subtraction_cannot_go_negative(self) -> None:
        with pytest.raises(ValidationError):
            Money(100) - Money(101)

    def test_comparison(self) -> None:
        assert Money(100) < Money(200)
        assert Money(200) >= Money(200)
        assert max(Money(5), Money(7)) == Money(7)

    def test_multiply(self) -> None:
        assert Money(250_000).multiply(3) == Money(750_000)
        with pytest.raises(ValidationError):
            Money(1).multiply(-1)

    def test_discount_rounds_down(self) -> None:
        assert Money(1_000).apply_discount(10) == Money(900)
        # 33.3% of 1001 is 333.33, so 1001 - 333 remains
        assert Money(1_001).apply_discount(33.3) == Money(668)
        assert Money(1_000).apply_discount(100).is_zero

    def test_discount_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Money(1_000).apply_discount(101)

    def test_str(self) -> None:
        assert str(Money(1_500_000)) == "1,500,000 IRR"
