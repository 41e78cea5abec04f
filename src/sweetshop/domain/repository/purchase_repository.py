"""Abstract repository for PurchaseRecord."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sweetshop.domain.model.purchase import PurchaseRecord


class PurchaseRepository(ABC):

    @abstractmethod
    def add(self, record: PurchaseRecord) -> None:
        """Insert a purchase record. Raises StoreError on failure."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[PurchaseRecord]:
        """Return one user's purchases, newest first."""

    @abstractmethod
    def list_all(self) -> list[PurchaseRecord]:
        """Return every purchase, newest first."""
