"""Domain service: Stock Adjustment.

Every change to a sweet's stock goes through here.  The service never
writes a quantity blindly: it reads a fresh snapshot, validates against
it, and issues a conditional write that only lands if the stored value
is still the one it read.  Two concurrent withdrawals against the same
stale value therefore cannot both succeed.

When a conditional write loses, the service re-reads and re-validates,
so the loser of a race sees the stock the winner left behind (and
usually an InsufficientStockError) instead of overdrawing it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from sweetshop.domain.exceptions import EntityNotFoundError, StockConflictError
from sweetshop.domain.model.sweet import Sweet
from sweetshop.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class StockChange:
    """Outcome of one applied adjustment.

    ``sweet`` is the snapshot the write was validated against, so its
    price is the one to bill.
    """

    sweet: Sweet
    previous_quantity: int
    new_quantity: int


class StockAdjustmentService:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._inventory_repo = inventory_repo
        self._max_attempts = max_attempts

    def withdraw(self, product_id: str, quantity: int) -> StockChange:
        """Remove *quantity* units.

        Raises EntityNotFoundError, InsufficientStockError (with the
        available amount) or StockConflictError.
        """
        return self._adjust(
            product_id,
            lambda sweet: sweet.quantity_after_withdrawal(quantity),
        )

    def deposit(self, product_id: str, quantity: int) -> StockChange:
        """Add *quantity* units (restock or compensation)."""
        return self._adjust(
            product_id,
            lambda sweet: sweet.quantity_after_deposit(quantity),
        )

    def _adjust(
        self, product_id: str, compute: Callable[[Sweet], int]
    ) -> StockChange:
        for attempt in range(1, self._max_attempts + 1):
            sweet = self._inventory_repo.get_by_id(product_id)
            if sweet is None:
                raise EntityNotFoundError(f"Sweet '{product_id}' not found")

            new_quantity = compute(sweet)

            if self._inventory_repo.write_quantity(
                product_id, expected=sweet.quantity, new=new_quantity
            ):
                return StockChange(
                    sweet=sweet,
                    previous_quantity=sweet.quantity,
                    new_quantity=new_quantity,
                )

            logger.debug(
                "Stock write conflict on %s (attempt %d/%d, expected %d)",
                product_id, attempt, self._max_attempts, sweet.quantity,
            )

        raise StockConflictError(
            f"Stock for sweet '{product_id}' kept changing; "
            f"gave up after {self._max_attempts} attempts"
        )
