"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from sweetshop.infrastructure.auth import TokenFileAuthenticator
from sweetshop.infrastructure.config import Settings
from sweetshop.infrastructure.persistence.database import Database
from sweetshop.infrastructure.persistence.sql_inventory_repository import (
    SqlInventoryRepository,
)
from sweetshop.infrastructure.persistence.sql_purchase_repository import (
    SqlPurchaseRepository,
)


class Container:
    """Concrete collaborators built from one Settings instance."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.database = Database(settings.database_url, timeout=settings.store_timeout)

    def inventory_repository(self) -> SqlInventoryRepository:
        return SqlInventoryRepository(self.database.session_factory)

    def purchase_repository(self) -> SqlPurchaseRepository:
        return SqlPurchaseRepository(self.database.session_factory)

    def authenticator(self) -> TokenFileAuthenticator:
        return TokenFileAuthenticator(self.settings.auth_tokens_file)


def build_container(settings: Settings | None = None) -> Container:
    return Container(settings or Settings.from_env())
