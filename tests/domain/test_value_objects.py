"""Unit tests for domain value objects."""

import pytest

from shopbot.domain.exceptions import InvalidQuantityError, ValidationError
from shopbot.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        assert Money(680).amount == 680

    def test_of_factory_from_string(self):
        assert Money.of(" 680 ") == Money(680)

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("6.80")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_non_integer_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Money(6.8)

    def test_bool_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Money(True)

    def test_addition(self):
        assert Money(680) + Money(120) == Money(800)

    def test_multiplication_by_int(self):
        assert Money(680) * 2 == Money(1360)

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money(680) * 1.5

    def test_str_formatting(self):
        assert str(Money(680)) == "NT$680"
        assert str(Money(12500)) == "NT$12,500"

    def test_comparison_operators(self):
        assert Money(5) < Money(10)
        assert Money(10) <= Money(10)

    def test_immutable(self):
        m = Money(10)
        with pytest.raises(AttributeError):
            m.amount = 20  # type: ignore[misc]


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be positive"):
            Quantity(-3)

    def test_float_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be an integer"):
            Quantity(2.0)

    def test_bool_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be an integer"):
            Quantity(True)

    def test_invalid_quantity_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Quantity(0)
