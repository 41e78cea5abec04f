"""SQLAlchemy-backed implementation of InventoryRepository.

``write_quantity`` is a single compare-and-swap statement::

    UPDATE sweets SET quantity = :new, updated_at = :now
    WHERE id = :id AND quantity = :expected

so the database linearizes concurrent writers on the same row.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from sweetshop.domain.exceptions import StoreError
from sweetshop.domain.model.sweet import Sweet
from sweetshop.domain.model.value_objects import Money
from sweetshop.domain.repository.inventory_repository import InventoryRepository
from sweetshop.infrastructure.persistence.models import SweetRow


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlInventoryRepository(InventoryRepository):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # --- InventoryRepository interface ----------------------------------------

    def get_by_id(self, product_id: str) -> Sweet | None:
        with self._transaction() as session:
            row = session.get(SweetRow, product_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Sweet]:
        with self._transaction() as session:
            rows = session.scalars(select(SweetRow).order_by(SweetRow.name))
            return [self._to_domain(row) for row in rows]

    def save(self, sweet: Sweet) -> None:
        with self._transaction() as session:
            session.merge(self._to_row(sweet))

    def write_quantity(self, product_id: str, expected: int, new: int) -> bool:
        stmt = (
            update(SweetRow)
            .where(SweetRow.id == product_id, SweetRow.quantity == expected)
            .values(quantity=new, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            result = session.execute(stmt)
            return result.rowcount == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(sweet: Sweet) -> SweetRow:
        return SweetRow(
            id=sweet.id,
            name=sweet.name,
            category=sweet.category,
            price=sweet.price.amount,
            quantity=sweet.quantity,
            description=sweet.description,
            created_at=sweet.created_at,
            updated_at=sweet.updated_at,
        )

    @staticmethod
    def _to_domain(row: SweetRow) -> Sweet:
        return Sweet(
            id=row.id,
            name=row.name,
            category=row.category,
            price=Money(Decimal(str(row.price))),
            quantity=row.quantity,
            description=row.description,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )

    # --- Session helpers ------------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        try:
            with self._session_factory.begin() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(f"Inventory store failure: {exc}") from exc
