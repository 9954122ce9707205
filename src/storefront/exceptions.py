"""Errors surfaced by the storefront to its callers.

Every error carries the HTTP status it maps to, a stable machine-readable
code, and structured details. The API renders them as a single JSON body.
"""

from typing import Any


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code = 500
    code = "storefront_error"
    retryable = False

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, **self.details}


class Unauthorized(StorefrontError):
    """Raised when a call arrives without an authenticated user."""

    status_code = 401
    code = "unauthorized"


class Forbidden(StorefrontError):
    """Raised when an authenticated user lacks the administrator role."""

    status_code = 403
    code = "forbidden"


class InvalidLineError(StorefrontError):
    """Raised when a submitted cart line is malformed."""

    status_code = 400
    code = "invalid_line"


class ProductNotFoundError(StorefrontError):
    """Raised when a line references a product that does not exist."""

    status_code = 404
    code = "product_not_found"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found", product_id=str(product_id))
        self.product_id = str(product_id)


class InsufficientStockError(StorefrontError):
    """Raised when a product cannot cover the requested quantity."""

    status_code = 409
    code = "insufficient_stock"

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for product {product_id}: {available} available, {requested} requested",
            product_id=str(product_id),
            requested=requested,
            available=available,
            shortfall=requested - available,
        )
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available
        self.shortfall = requested - available


class StoreUnavailableError(StorefrontError):
    """Raised when the data store fails mid-operation. The caller may retry."""

    status_code = 503
    code = "store_unavailable"
    retryable = True


class CheckoutAbortFailedError(StorefrontError):
    """Raised when rolling back a failed checkout itself fails.

    Durable state may be inconsistent and needs out-of-band reconciliation.
    """

    status_code = 500
    code = "checkout_abort_failed"
