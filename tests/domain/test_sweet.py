"""Unit tests for the Sweet aggregate and PurchaseRecord."""

from decimal import Decimal

import pytest

from sweetshop.domain.exceptions import InsufficientStockError, ValidationError
from sweetshop.domain.model.purchase import PurchaseRecord
from sweetshop.domain.model.sweet import Sweet
from sweetshop.domain.model.value_objects import MAX_STOCK, Money, Quantity
from tests.fakes import make_sweet


class TestSweetCreate:

    def test_create_assigns_id_and_timestamps(self):
        sweet = Sweet.create(name=" Gummy Bears ", category="Gummies", price=Money.of("1.99"), quantity=100)
        assert sweet.id
        assert sweet.name == "Gummy Bears"
        assert sweet.created_at.tzinfo is not None
        assert sweet.updated_at >= sweet.created_at

    def test_ids_are_unique(self):
        a = Sweet.create(name="A", category="Candy", price=Money.of("1"))
        b = Sweet.create(name="B", category="Candy", price=Money.of("1"))
        assert a.id != b.id

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Sweet.create(name="  ", category="Candy", price=Money.of("1"))

    def test_blank_category_rejected(self):
        with pytest.raises(ValidationError, match="category is required"):
            Sweet.create(name="Lollipops", category="", price=Money.of("1"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Sweet.create(name="Lollipops", category="Candy", price=Money.of("1"), quantity=-1)

    def test_stock_beyond_storage_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Sweet.create(
                name="Lollipops", category="Candy", price=Money.of("1"), quantity=MAX_STOCK + 1
            )


class TestSweetStockRules:

    def test_withdrawal_within_stock(self):
        assert make_sweet(quantity=5).quantity_after_withdrawal(3) == 2

    def test_withdrawal_of_everything(self):
        assert make_sweet(quantity=5).quantity_after_withdrawal(5) == 0

    def test_withdrawal_beyond_stock_reports_available(self):
        sweet = make_sweet(quantity=2)
        with pytest.raises(InsufficientStockError) as exc_info:
            sweet.quantity_after_withdrawal(5)
        assert exc_info.value.available == 2
        assert exc_info.value.requested == 5
        assert "Insufficient stock" in str(exc_info.value)

    def test_insufficient_stock_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            make_sweet(quantity=0).ensure_available(1)

    def test_deposit(self):
        assert make_sweet(quantity=2).quantity_after_deposit(10) == 12

    def test_non_positive_deposit_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            make_sweet().quantity_after_deposit(0)

    def test_deposit_up_to_the_storage_limit(self):
        assert make_sweet(quantity=2).quantity_after_deposit(MAX_STOCK - 2) == MAX_STOCK

    def test_deposit_past_the_storage_limit_rejected(self):
        with pytest.raises(ValidationError, match="maximum stock"):
            make_sweet(quantity=2).quantity_after_deposit(MAX_STOCK - 1)


class TestPurchaseRecord:

    def test_total_is_price_times_quantity(self):
        record = PurchaseRecord.create("alice", make_sweet(price="2.99"), Quantity(3))
        assert record.total_price.amount == Decimal("8.97")
        assert record.product_id == "p1"
        assert record.user_id == "alice"

    def test_price_is_a_snapshot(self):
        sweet = make_sweet(price="2.99")
        record = PurchaseRecord.create("alice", sweet, Quantity(2))

        sweet.price = Money.of("9.99")

        assert record.total_price == Money.of("5.98")

    def test_record_is_immutable(self):
        record = PurchaseRecord.create("alice", make_sweet(), Quantity(1))
        with pytest.raises(AttributeError):
            record.quantity = Quantity(2)
