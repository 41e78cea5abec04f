"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from sweetshop.domain.exceptions import ValidationError
from sweetshop.domain.model.value_objects import MAX_STOCK, Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("2.99").amount == Decimal("2.99")

    def test_of_factory_from_float_keeps_cents(self):
        assert Money.of(2.99).amount == Decimal("2.99")

    def test_quantized_to_two_places(self):
        assert Money.of("1.005").amount == Decimal("1.01")
        assert Money.of(3).amount == Decimal("3.00")

    def test_zero_allowed(self):
        assert Money.of("0").amount == Decimal("0.00")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_non_decimal_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(2.99)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("two dollars")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money(Decimal("NaN"))

    def test_multiplication_is_exact(self):
        assert (Money.of("2.99") * 3).amount == Decimal("8.97")
        assert (Money.of("0.10") * 3).amount == Decimal("0.30")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("2.99") * 1.5

    def test_multiplication_by_bool_rejected(self):
        with pytest.raises(TypeError):
            Money.of("2.99") * True

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("8.97")) == "$8.97"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -1, -100])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    @pytest.mark.parametrize("value", [2.5, "3", None, True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(value)

    def test_largest_storable_value(self):
        assert Quantity(MAX_STOCK).value == 2**31 - 1

    @pytest.mark.parametrize("value", [MAX_STOCK + 1, 2**63])
    def test_beyond_storage_rejected(self, value):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Quantity(value)

    def test_str(self):
        assert str(Quantity(7)) == "7"
