"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Checkout lines are accepted loosely so that line
validation reports domain errors instead of schema errors.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class CartItemSchema(BaseModel):
    line_id: str
    product_id: str
    name: str
    unit_price: float
    quantity: int


class CartResponse(BaseModel):
    items: list[CartItemSchema]
    count: int


class CheckoutRequest(BaseModel):
    lines: list[dict[str, Any]] = Field(default_factory=list)
    idempotency_key: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "lines": [{"product_id": "prod-001", "quantity": 2, "unit_price": 10.0}],
                    "idempotency_key": "c0ffee-01",
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    product_id: str
    name: str | None = None
    quantity: int
    unit_price: float
    subtotal: float


class OrderSchema(BaseModel):
    order_id: str
    placed_at: datetime
    lines: list[OrderLineSchema]
    total: float


class OrderHistoryResponse(BaseModel):
    orders: list[OrderSchema]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(ge=0)
    stock: int = Field(ge=0, default=0)
    season: str = Field(max_length=50)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    season: str | None = Field(default=None, max_length=50)


class ProductSchema(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    stock: int
    season: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductListResponse(BaseModel):
    products: list[ProductSchema]


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------
class ProductSalesSchema(BaseModel):
    product_id: str
    name: str | None = None
    units_sold: int
    revenue: float


class SalesReportResponse(BaseModel):
    products: list[ProductSalesSchema]
