"""Application service: Purchase Sweet use case.

Decrements stock and records the purchase, atomically from the
caller's point of view:

1. Validate the request (no side effects on failure).
2. Withdraw stock through the conditional-write service.
3. Insert the PurchaseRecord with a price snapshot.
4. If the insert fails, deposit the withdrawn units back and report
   TransactionFailedError.

If the compensating deposit also fails, stock stays decremented with no
purchase record.  That state is logged at CRITICAL for manual
reconciliation and still reported as TransactionFailedError.
"""

from __future__ import annotations

import logging

from sweetshop.application.dto import PurchaseDTO, PurchaseResultDTO
from sweetshop.domain.exceptions import (
    DomainException,
    StockConflictError,
    StoreError,
    TransactionFailedError,
    ValidationError,
)
from sweetshop.domain.model.purchase import PurchaseRecord
from sweetshop.domain.model.value_objects import Quantity
from sweetshop.domain.repository.inventory_repository import InventoryRepository
from sweetshop.domain.repository.purchase_repository import PurchaseRepository
from sweetshop.domain.service.stock_adjustment_service import (
    DEFAULT_MAX_ATTEMPTS,
    StockAdjustmentService,
    StockChange,
)

logger = logging.getLogger(__name__)


class PurchaseSweetHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        purchase_repo: PurchaseRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._purchase_repo = purchase_repo
        self._stock = StockAdjustmentService(inventory_repo, max_attempts)

    def handle(self, product_id: str, quantity: int, actor_id: str) -> PurchaseResultDTO:
        if not product_id or not str(product_id).strip():
            raise ValidationError("Sweet id is required")
        qty = Quantity(quantity)

        try:
            change = self._stock.withdraw(product_id, qty.value)
        except (StoreError, StockConflictError) as exc:
            logger.error("Stock withdrawal for %s failed: %s", product_id, exc)
            raise TransactionFailedError("Failed to update inventory") from exc

        record = PurchaseRecord.create(user_id=actor_id, sweet=change.sweet, quantity=qty)

        try:
            self._purchase_repo.add(record)
        except StoreError as exc:
            self._compensate(change, qty.value, actor_id, exc)

        logger.info(
            "Purchase %s: %s bought %d x %s for %s, %d left",
            record.id, actor_id, qty.value, change.sweet.name,
            record.total_price, change.new_quantity,
        )
        return PurchaseResultDTO(
            purchase=PurchaseDTO.from_record(record),
            remaining_stock=change.new_quantity,
        )

    def _compensate(
        self,
        change: StockChange,
        quantity: int,
        actor_id: str,
        cause: Exception,
    ) -> None:
        """Put withdrawn units back after the purchase insert failed. Always raises."""
        product_id = change.sweet.id
        logger.warning(
            "Recording purchase of %d x %s failed (%s); restoring stock",
            quantity, product_id, cause,
        )

        try:
            restored = self._stock.deposit(product_id, quantity)
        except DomainException as exc:
            logger.critical(
                "RECONCILIATION REQUIRED: stock of %s was decremented by %d "
                "(from %d to %d) for actor %s but no purchase was recorded "
                "and the rollback failed: %s",
                product_id, quantity, change.previous_quantity,
                change.new_quantity, actor_id, exc,
            )
            raise TransactionFailedError(
                "Failed to record purchase and restore stock", compensated=False
            ) from exc

        logger.info("Stock of %s restored to %d", product_id, restored.new_quantity)
        raise TransactionFailedError("Failed to record purchase") from cause
