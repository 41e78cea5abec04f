"""Sweet shop FastAPI application.

Usage:
    uvicorn sweetshop.infrastructure.api.app:app_from_env --factory
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sweetshop.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    InsufficientStockError,
    StoreError,
    TransactionFailedError,
    UnauthorizedError,
    ValidationError,
)
from sweetshop.domain.repository.inventory_repository import InventoryRepository
from sweetshop.domain.repository.purchase_repository import PurchaseRepository
from sweetshop.infrastructure.api.routes import catalog_router, inventory_router
from sweetshop.infrastructure.api.schemas import ErrorResponse
from sweetshop.infrastructure.auth import Authenticator
from sweetshop.infrastructure.bootstrap import build_container

logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins
_ERROR_MAP: list[tuple[type[DomainException], int, str]] = [
    (InsufficientStockError, 400, "insufficient_stock"),
    (ValidationError, 400, "invalid_request"),
    (UnauthorizedError, 401, "unauthorized"),
    (ForbiddenError, 403, "forbidden"),
    (EntityNotFoundError, 404, "not_found"),
    (TransactionFailedError, 500, "transaction_failed"),
]


def error_response(exc: DomainException) -> JSONResponse:
    status, code = 500, "internal_error"
    for exc_type, mapped_status, mapped_code in _ERROR_MAP:
        if isinstance(exc, exc_type):
            status, code = mapped_status, mapped_code
            break

    body = ErrorResponse(error=str(exc), code=code)
    if isinstance(exc, InsufficientStockError):
        body.available = exc.available
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


def create_app(
    inventory_repo: InventoryRepository,
    purchase_repo: PurchaseRepository,
    authenticator: Authenticator,
    max_write_attempts: int = 3,
) -> FastAPI:
    app = FastAPI(
        title="Sweet Shop API",
        description="Purchase and restock transactions for the sweet shop inventory",
    )
    app.state.inventory_repo = inventory_repo
    app.state.purchase_repo = purchase_repo
    app.state.authenticator = authenticator
    app.state.max_write_attempts = max_write_attempts

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if isinstance(exc, (TransactionFailedError, StoreError)):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(ValidationError("Invalid sweetId or quantity"))

    app.include_router(inventory_router)
    app.include_router(catalog_router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def app_from_env() -> FastAPI:
    """Build the app from environment settings (uvicorn ``--factory`` entry)."""
    container = build_container()
    container.database.create_schema()
    return create_app(
        inventory_repo=container.inventory_repository(),
        purchase_repo=container.purchase_repository(),
        authenticator=container.authenticator(),
        max_write_attempts=container.settings.max_write_attempts,
    )
