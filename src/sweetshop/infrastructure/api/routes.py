"""FastAPI routes for purchase, restock and the read-only listings.

Route functions are plain ``def`` so the blocking store calls run in
FastAPI's worker threadpool.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sweetshop.application.purchase_sweet import PurchaseSweetHandler
from sweetshop.application.restock_sweet import RestockSweetHandler
from sweetshop.application.show_inventory import ShowInventoryHandler
from sweetshop.application.show_purchases import ShowPurchasesHandler
from sweetshop.domain.exceptions import ForbiddenError, UnauthorizedError
from sweetshop.infrastructure.api.schemas import (
    PurchaseRecordSchema,
    PurchaseResponse,
    RestockResponse,
    StockRequest,
    SweetSchema,
)
from sweetshop.infrastructure.auth import Actor

_bearer = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# Auth dependencies
# ---------------------------------------------------------------------------
def current_actor(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Actor:
    if credentials is None:
        raise UnauthorizedError("Missing authorization header")
    actor = request.app.state.authenticator.resolve(credentials.credentials)
    if actor is None:
        raise UnauthorizedError("Invalid authorization token")
    return actor


def admin_actor(actor: Actor = Depends(current_actor)) -> Actor:
    if not actor.is_admin:
        raise ForbiddenError("Admin access required")
    return actor


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.post("/purchase", response_model=PurchaseResponse)
def purchase(
    body: StockRequest,
    request: Request,
    actor: Actor = Depends(current_actor),
) -> PurchaseResponse:
    state = request.app.state
    handler = PurchaseSweetHandler(
        state.inventory_repo, state.purchase_repo, state.max_write_attempts
    )
    result = handler.handle(body.sweet_id, body.quantity, actor.user_id)
    return PurchaseResponse(
        purchase_record=PurchaseRecordSchema.from_dto(result.purchase),
        remaining_stock=result.remaining_stock,
    )


@inventory_router.post("/restock", response_model=RestockResponse)
def restock(
    body: StockRequest,
    request: Request,
    actor: Actor = Depends(admin_actor),
) -> RestockResponse:
    state = request.app.state
    handler = RestockSweetHandler(state.inventory_repo, state.max_write_attempts)
    result = handler.handle(body.sweet_id, body.quantity, actor.user_id, actor.is_admin)
    return RestockResponse(
        sweet_id=result.product_id,
        updated_quantity=result.updated_quantity,
    )


# ---------------------------------------------------------------------------
# Read-only listings
# ---------------------------------------------------------------------------
catalog_router = APIRouter(tags=["catalog"])


@catalog_router.get("/sweets", response_model=list[SweetSchema])
def list_sweets(request: Request, actor: Actor = Depends(current_actor)) -> list[SweetSchema]:
    handler = ShowInventoryHandler(request.app.state.inventory_repo)
    return [SweetSchema.from_dto(line) for line in handler.handle()]


@catalog_router.get("/purchases", response_model=list[PurchaseRecordSchema])
def list_purchases(
    request: Request, actor: Actor = Depends(current_actor)
) -> list[PurchaseRecordSchema]:
    handler = ShowPurchasesHandler(request.app.state.purchase_repo)
    return [
        PurchaseRecordSchema.from_dto(dto)
        for dto in handler.handle(actor.user_id, is_admin=actor.is_admin)
    ]
