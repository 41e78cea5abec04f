"""Engine and session management for the relational store."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from pathlib import Path

from sqlalchemy import Engine, create_engine, event, make_url, select
from sqlalchemy.orm import Session, sessionmaker

from sweetshop.domain.model.sweet import Sweet
from sweetshop.domain.model.value_objects import Money
from sweetshop.infrastructure.persistence.models import Base, SweetRow
from sweetshop.infrastructure.persistence.sql_inventory_repository import (
    SqlInventoryRepository,
)

logger = logging.getLogger(__name__)

SAMPLE_SWEETS = [
    ("Dark Chocolate Bar", "Chocolate", "2.99", 50, "Rich 70% cocoa dark chocolate"),
    ("Milk Chocolate Truffles", "Chocolate", "5.99", 30, "Smooth milk chocolate truffles"),
    ("Gummy Bears", "Gummies", "1.99", 100, "Classic fruit-flavored gummy bears"),
    ("Sour Worms", "Gummies", "2.49", 75, "Tangy sour gummy worms"),
    ("Lollipops", "Candy", "0.99", 150, "Assorted fruit lollipops"),
    ("Caramel Chews", "Candy", "3.49", 60, "Soft and chewy caramel candies"),
    ("Peppermint Bark", "Chocolate", "4.99", 40, "White and dark chocolate with peppermint"),
    ("Jelly Beans", "Candy", "2.99", 80, "Mix of classic jelly bean flavors"),
]


def make_engine(database_url: str, timeout: float = 5.0) -> Engine:
    """Create an engine whose round trips give up after *timeout* seconds."""
    url = make_url(database_url)
    connect_args: dict = {}
    if url.get_backend_name() == "sqlite":
        # busy timeout: how long a writer waits on a locked database
        connect_args["timeout"] = timeout
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    elif url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = max(1, math.ceil(timeout))
        connect_args["options"] = f"-c statement_timeout={int(timeout * 1000)}"

    engine = create_engine(url, connect_args=connect_args)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class Database:
    """Owns the engine and hands out sessions to the repositories."""

    def __init__(self, database_url: str, timeout: float = 5.0) -> None:
        self.engine = make_engine(database_url, timeout)
        self.session_factory: sessionmaker[Session] = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)
        logger.debug("Schema ensured on %s", self.engine.url)

    def seed_sample_sweets(self) -> int:
        """Insert the sample catalog if no sweets exist yet.

        Returns the number of sweets inserted.
        """
        with self.session_factory() as session:
            if session.scalar(select(SweetRow.id).limit(1)) is not None:
                logger.info("Catalog already populated; skipping seed")
                return 0

        repo = SqlInventoryRepository(self.session_factory)
        for name, category, price, quantity, description in SAMPLE_SWEETS:
            repo.save(
                Sweet.create(
                    name=name,
                    category=category,
                    price=Money(Decimal(price)),
                    quantity=quantity,
                    description=description,
                )
            )
        logger.info("Seeded %d sample sweets", len(SAMPLE_SWEETS))
        return len(SAMPLE_SWEETS)

    def dispose(self) -> None:
        self.engine.dispose()
