"""SQLAlchemy table mappings for sweets and purchases.

The CHECK constraints repeat the domain invariants at the storage level,
so a buggy writer still cannot drive stock negative.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class SweetRow(Base):
    __tablename__ = "sweets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        Index("idx_sweets_category", "category"),
        Index("idx_sweets_name", "name"),
    )


class PurchaseRow(Base):
    __tablename__ = "purchases"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    sweet_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sweets.id", ondelete="RESTRICT"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_purchases_quantity_positive"),
        CheckConstraint("total_price >= 0", name="ck_purchases_total_non_negative"),
        Index("idx_purchases_user_id", "user_id"),
        Index("idx_purchases_sweet_id", "sweet_id"),
        Index("idx_purchases_created_at", "created_at"),
    )
