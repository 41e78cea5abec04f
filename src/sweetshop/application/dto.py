"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sweetshop.domain.model.purchase import PurchaseRecord
from sweetshop.domain.model.sweet import Sweet


@dataclass(frozen=True)
class PurchaseDTO:
    id: str
    user_id: str
    product_id: str
    quantity: int
    total_price: Decimal
    created_at: datetime

    @staticmethod
    def from_record(record: PurchaseRecord) -> PurchaseDTO:
        return PurchaseDTO(
            id=record.id,
            user_id=record.user_id,
            product_id=record.product_id,
            quantity=record.quantity.value,
            total_price=record.total_price.amount,
            created_at=record.created_at,
        )


@dataclass(frozen=True)
class PurchaseResultDTO:
    """Output of a successful purchase."""

    purchase: PurchaseDTO
    remaining_stock: int


@dataclass(frozen=True)
class RestockResultDTO:
    """Output of a successful restock."""

    product_id: str
    product_name: str
    updated_quantity: int


@dataclass(frozen=True)
class InventoryLineDTO:
    id: str
    name: str
    category: str
    price: Decimal
    quantity: int
    description: str | None

    @staticmethod
    def from_sweet(sweet: Sweet) -> InventoryLineDTO:
        return InventoryLineDTO(
            id=sweet.id,
            name=sweet.name,
            category=sweet.category,
            price=sweet.price.amount,
            quantity=sweet.quantity,
            description=sweet.description,
        )
