"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map them to
user-facing messages and status codes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request was malformed or a business rule was violated."""


class InsufficientStockError(ValidationError):
    """More units were requested than are currently in stock.

    Carries the available amount so the caller can retry with a
    corrected quantity without re-polling.
    """

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )
        self.requested = requested
        self.available = available


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthorizationError(DomainException):
    """Base class for authentication and permission failures."""


class UnauthorizedError(AuthorizationError):
    """No actor could be resolved from the presented credential."""


class ForbiddenError(AuthorizationError):
    """The actor is known but lacks the required role."""


class TransactionFailedError(DomainException):
    """A write, or the compensating write that follows it, failed.

    ``compensated`` is False when stock was left decremented without a
    matching purchase record.
    """

    def __init__(self, message: str, compensated: bool = True) -> None:
        super().__init__(message)
        self.compensated = compensated


class StoreError(DomainException):
    """The backing store could not complete a read or write."""


class StockConflictError(DomainException):
    """A conditional write kept losing to concurrent writers."""
