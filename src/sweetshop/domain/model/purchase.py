"""PurchaseRecord: the billing line written once per successful purchase."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sweetshop.domain.model.sweet import Sweet
from sweetshop.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class PurchaseRecord:
    """Immutable record of a completed purchase.

    ``total_price`` is computed from the sweet's price at purchase time;
    a later price change never alters it.
    """

    id: str
    user_id: str
    product_id: str
    quantity: Quantity
    total_price: Money
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(user_id: str, sweet: Sweet, quantity: Quantity) -> PurchaseRecord:
        return PurchaseRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            product_id=sweet.id,
            quantity=quantity,
            total_price=sweet.price * quantity.value,  # <-- price snapshot
        )
