"""FastAPI routes for the Storefront — cart, checkout, orders, catalog, reports."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import current_admin, current_user
from storefront.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    CartResponse,
    CheckoutRequest,
    OrderHistoryResponse,
    OrderIdResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductSchema,
    SalesReportResponse,
    StatusResponse,
    UpdateProductRequest,
)
from storefront.cart.items import AddToCart, RemoveCartLine
from storefront.cart.queries import cart_count, list_cart
from storefront.catalog.management import AddProduct, RemoveProduct, UpdateProduct
from storefront.catalog.queries import get_product, list_products
from storefront.checkout.coordinator import checkout
from storefront.order.history import list_orders
from storefront.projections.product_sales import sales_report

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(user_id: str = Depends(current_user)) -> CartResponse:
    return CartResponse(items=list_cart(user_id), count=cart_count(user_id))


@cart_router.post("/items", response_model=StatusResponse)
async def add_cart_item(body: AddToCartRequest, user_id: str = Depends(current_user)) -> StatusResponse:
    command = AddToCart(
        customer_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{line_id}", response_model=StatusResponse)
async def remove_cart_item(line_id: str, user_id: str = Depends(current_user)) -> StatusResponse:
    command = RemoveCartLine(customer_id=user_id, line_id=line_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.post("/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(body: CheckoutRequest, user_id: str = Depends(current_user)) -> OrderIdResponse:
    order_id = checkout(user_id, body.lines, idempotency_key=body.idempotency_key)
    return OrderIdResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderHistoryResponse)
async def order_history(user_id: str = Depends(current_user)) -> OrderHistoryResponse:
    return OrderHistoryResponse(orders=list_orders(user_id))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def browse_products() -> ProductListResponse:
    return ProductListResponse(products=list_products())


@product_router.get("/{product_id}", response_model=ProductSchema)
async def product_detail(product_id: str) -> ProductSchema:
    return ProductSchema(**get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest, _admin: str = Depends(current_admin)) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        season=body.season,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, _admin: str = Depends(current_admin)
) -> StatusResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str, _admin: str = Depends(current_admin)) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Report Router
# ---------------------------------------------------------------------------
report_router = APIRouter(prefix="/reports", tags=["reports"])


@report_router.get("/sales", response_model=SalesReportResponse)
async def sales(_admin: str = Depends(current_admin)) -> SalesReportResponse:
    return SalesReportResponse(products=sales_report())
