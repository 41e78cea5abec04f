"""Abstract repository for the Sweet aggregate's stock.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sweetshop.domain.model.sweet import Sweet


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Sweet | None:
        """Return a fresh snapshot of a sweet, or None if it does not exist."""

    @abstractmethod
    def list_all(self) -> list[Sweet]:
        """Return every sweet in the catalog."""

    @abstractmethod
    def save(self, sweet: Sweet) -> None:
        """Persist a new or updated sweet (seeding and reconstitution)."""

    @abstractmethod
    def write_quantity(self, product_id: str, expected: int, new: int) -> bool:
        """Set the stock to *new* only if it still equals *expected*.

        Returns True when the row was updated and False on conflict
        (the stored quantity changed since it was read, or the row is gone).
        Implementations refresh ``updated_at`` on success and raise
        StoreError if the store itself fails.
        """
