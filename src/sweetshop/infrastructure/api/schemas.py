"""Pydantic request/response schemas for the HTTP boundary.

These are external contracts, separate from the application DTOs.
Field names go over the wire in camelCase (``sweetId``,
``remainingStock``) to match the web client.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from sweetshop.application.dto import InventoryLineDTO, PurchaseDTO


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class StockRequest(CamelModel):
    """Body of both purchase and restock calls.

    ``quantity`` is strict so ``"3"`` or ``2.5`` are rejected instead of
    coerced; range checks are left to the domain.
    """

    sweet_id: str = Field(min_length=1)
    quantity: StrictInt


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class PurchaseRecordSchema(CamelModel):
    id: str
    user_id: str
    sweet_id: str
    quantity: int
    total_price: float
    created_at: datetime

    @staticmethod
    def from_dto(dto: PurchaseDTO) -> PurchaseRecordSchema:
        return PurchaseRecordSchema(
            id=dto.id,
            user_id=dto.user_id,
            sweet_id=dto.product_id,
            quantity=dto.quantity,
            total_price=float(dto.total_price),
            created_at=dto.created_at,
        )


class PurchaseResponse(CamelModel):
    message: str = "Purchase successful"
    purchase_record: PurchaseRecordSchema
    remaining_stock: int


class RestockResponse(CamelModel):
    message: str = "Restock successful"
    sweet_id: str
    updated_quantity: int


class SweetSchema(CamelModel):
    id: str
    name: str
    category: str
    price: float
    quantity: int
    description: str | None = None

    @staticmethod
    def from_dto(dto: InventoryLineDTO) -> SweetSchema:
        return SweetSchema(
            id=dto.id,
            name=dto.name,
            category=dto.category,
            price=float(dto.price),
            quantity=dto.quantity,
            description=dto.description,
        )


class ErrorResponse(BaseModel):
    error: str
    code: str
    available: int | None = None
