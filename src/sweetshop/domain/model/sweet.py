"""Sweet aggregate: a catalog product with a stock level.

The core only ever touches ``quantity``; every other field belongs to
the catalog and is read here as a snapshot.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sweetshop.domain.exceptions import InsufficientStockError, ValidationError
from sweetshop.domain.model.value_objects import MAX_STOCK, Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Sweet:
    """Aggregate root for a product and its stock.

    Use ``Sweet.create()`` for new records.  The ``__init__`` stays simple
    so repositories can reconstitute stored rows without re-validating.

    Invariant: ``quantity >= 0``.
    """

    id: str
    name: str
    category: str
    price: Money
    quantity: int
    description: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW sweets only) -----------------------------------

    @staticmethod
    def create(
        name: str,
        category: str,
        price: Money,
        quantity: int = 0,
        description: str | None = None,
        sweet_id: str | None = None,
    ) -> Sweet:
        if not name or not name.strip():
            raise ValidationError("Sweet name is required")
        if not category or not category.strip():
            raise ValidationError("Sweet category is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("Stock quantity must be an integer")
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        if quantity > MAX_STOCK:
            raise ValidationError(f"Stock quantity cannot exceed {MAX_STOCK}")

        return Sweet(
            id=sweet_id or str(uuid.uuid4()),
            name=name.strip(),
            category=category.strip(),
            price=price,
            quantity=quantity,
            description=description,
        )

    # --- Stock rules ----------------------------------------------------------

    def ensure_available(self, requested: int) -> None:
        """Raise InsufficientStockError if *requested* exceeds stock."""
        if requested > self.quantity:
            raise InsufficientStockError(self.name, requested, self.quantity)

    def quantity_after_withdrawal(self, requested: int) -> int:
        self.ensure_available(requested)
        return self.quantity - requested

    def quantity_after_deposit(self, added: int) -> int:
        if added <= 0:
            raise ValidationError("Restock quantity must be positive")
        if added > MAX_STOCK - self.quantity:
            raise ValidationError(
                f"Restocking {added} would take {self.name} past the "
                f"maximum stock of {MAX_STOCK} (currently {self.quantity})"
            )
        return self.quantity + added
