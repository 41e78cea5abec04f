"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from sweetshop.application.dto import InventoryLineDTO
from sweetshop.domain.repository.inventory_repository import InventoryRepository


class ShowInventoryHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self) -> list[InventoryLineDTO]:
        sweets = sorted(self._inventory_repo.list_all(), key=lambda s: s.name.lower())
        return [InventoryLineDTO.from_sweet(sweet) for sweet in sweets]
