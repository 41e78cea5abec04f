"""Application service: Restock Sweet use case.

Admin-only.  The admin decision comes from the auth collaborator as an
explicit input; this handler checks it but never recomputes it.
"""

from __future__ import annotations

import logging

from sweetshop.application.dto import RestockResultDTO
from sweetshop.domain.exceptions import (
    ForbiddenError,
    StockConflictError,
    StoreError,
    TransactionFailedError,
    ValidationError,
)
from sweetshop.domain.model.value_objects import Quantity
from sweetshop.domain.repository.inventory_repository import InventoryRepository
from sweetshop.domain.service.stock_adjustment_service import (
    DEFAULT_MAX_ATTEMPTS,
    StockAdjustmentService,
)

logger = logging.getLogger(__name__)


class RestockSweetHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._stock = StockAdjustmentService(inventory_repo, max_attempts)

    def handle(
        self,
        product_id: str,
        quantity: int,
        actor_id: str,
        is_admin: bool,
    ) -> RestockResultDTO:
        if not is_admin:
            raise ForbiddenError("Admin access required")
        if not product_id or not str(product_id).strip():
            raise ValidationError("Sweet id is required")
        qty = Quantity(quantity)

        try:
            change = self._stock.deposit(product_id, qty.value)
        except (StoreError, StockConflictError) as exc:
            logger.error("Restock of %s failed: %s", product_id, exc)
            raise TransactionFailedError("Failed to restock") from exc

        logger.info(
            "Restock by %s: %s %d -> %d",
            actor_id, change.sweet.name, change.previous_quantity, change.new_quantity,
        )
        return RestockResultDTO(
            product_id=change.sweet.id,
            product_name=change.sweet.name,
            updated_quantity=change.new_quantity,
        )
