"""SQLAlchemy-backed implementation of PurchaseRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from sweetshop.domain.exceptions import StoreError
from sweetshop.domain.model.purchase import PurchaseRecord
from sweetshop.domain.model.value_objects import Money, Quantity
from sweetshop.domain.repository.purchase_repository import PurchaseRepository
from sweetshop.infrastructure.persistence.models import PurchaseRow
from sweetshop.infrastructure.persistence.sql_inventory_repository import as_utc


class SqlPurchaseRepository(PurchaseRepository):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # --- PurchaseRepository interface -----------------------------------------

    def add(self, record: PurchaseRecord) -> None:
        try:
            with self._session_factory.begin() as session:
                session.add(self._to_row(record))
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not insert purchase {record.id}: {exc}") from exc

    def list_for_user(self, user_id: str) -> list[PurchaseRecord]:
        return self._query(
            select(PurchaseRow)
            .where(PurchaseRow.user_id == user_id)
            .order_by(PurchaseRow.created_at.desc())
        )

    def list_all(self) -> list[PurchaseRecord]:
        return self._query(select(PurchaseRow).order_by(PurchaseRow.created_at.desc()))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(record: PurchaseRecord) -> PurchaseRow:
        return PurchaseRow(
            id=record.id,
            user_id=record.user_id,
            sweet_id=record.product_id,
            quantity=record.quantity.value,
            total_price=record.total_price.amount,
            created_at=record.created_at,
        )

    @staticmethod
    def _to_domain(row: PurchaseRow) -> PurchaseRecord:
        return PurchaseRecord(
            id=row.id,
            user_id=row.user_id,
            product_id=row.sweet_id,
            quantity=Quantity(row.quantity),
            total_price=Money(Decimal(str(row.total_price))),
            created_at=as_utc(row.created_at),
        )

    def _query(self, stmt) -> list[PurchaseRecord]:
        try:
            with self._session_factory() as session:
                return [self._to_domain(row) for row in session.scalars(stmt)]
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read purchases: {exc}") from exc
