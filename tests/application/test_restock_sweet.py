"""Integration tests for the RestockSweet use case."""

import pytest

from sweetshop.application.purchase_sweet import PurchaseSweetHandler
from sweetshop.application.restock_sweet import RestockSweetHandler
from sweetshop.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    TransactionFailedError,
    ValidationError,
)
from tests.fakes import FakeInventoryRepository, FakePurchaseRepository, make_sweet


def _setup(quantity: int = 2):
    inventory_repo = FakeInventoryRepository([make_sweet(quantity=quantity)])
    return inventory_repo, RestockSweetHandler(inventory_repo)


class TestRestockHappyPath:

    def test_admin_restock_adds_units(self):
        inventory_repo, handler = _setup(quantity=2)

        result = handler.handle("p1", 10, actor_id="admin", is_admin=True)

        assert result.updated_quantity == 12
        assert result.product_id == "p1"
        assert result.product_name == "Dark Chocolate Bar"
        assert inventory_repo.quantity_of("p1") == 12

    def test_purchase_then_restock_scenario(self):
        inventory_repo = FakeInventoryRepository([make_sweet(quantity=5, price="2.99")])
        purchase = PurchaseSweetHandler(inventory_repo, FakePurchaseRepository())
        restock = RestockSweetHandler(inventory_repo)

        purchase.handle("p1", 3, actor_id="alice")
        result = restock.handle("p1", 10, actor_id="admin", is_admin=True)

        assert result.updated_quantity == 12


class TestRestockValidation:

    def test_non_admin_forbidden(self):
        inventory_repo, handler = _setup(quantity=2)

        with pytest.raises(ForbiddenError, match="Admin access required"):
            handler.handle("p1", 10, actor_id="alice", is_admin=False)

        assert inventory_repo.quantity_of("p1") == 2
        assert inventory_repo.write_calls == 0

    def test_forbidden_checked_before_input(self):
        _, handler = _setup()
        with pytest.raises(ForbiddenError):
            handler.handle("", -1, actor_id="alice", is_admin=False)

    @pytest.mark.parametrize("quantity", [0, -10, 1.5, "10"])
    def test_invalid_quantity(self, quantity):
        inventory_repo, handler = _setup(quantity=2)

        with pytest.raises(ValidationError):
            handler.handle("p1", quantity, actor_id="admin", is_admin=True)

        assert inventory_repo.quantity_of("p1") == 2

    def test_missing_id(self):
        _, handler = _setup()
        with pytest.raises(ValidationError, match="Sweet id is required"):
            handler.handle("", 1, actor_id="admin", is_admin=True)

    def test_unknown_sweet(self):
        _, handler = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle("nope", 1, actor_id="admin", is_admin=True)


class TestRestockFailures:

    def test_store_outage(self):
        inventory_repo, handler = _setup(quantity=2)
        inventory_repo.fail_writes_after(0)

        with pytest.raises(TransactionFailedError, match="Failed to restock"):
            handler.handle("p1", 10, actor_id="admin", is_admin=True)

        assert inventory_repo.quantity_of("p1") == 2

    def test_conflict_retried(self):
        inventory_repo, handler = _setup(quantity=2)
        inventory_repo.force_conflicts(2)

        result = handler.handle("p1", 1, actor_id="admin", is_admin=True)

        assert result.updated_quantity == 3
