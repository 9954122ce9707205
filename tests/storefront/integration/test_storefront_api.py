"""Integration tests for the Storefront API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers
from storefront.api import (
    cart_router,
    order_router,
    product_router,
    register_storefront_error_handlers,
    report_router,
)
from storefront.catalog.product import Product

USER = {"X-User-Id": "cust-api-001"}
OTHER_USER = {"X-User-Id": "cust-api-002"}
ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(product_router)
    app.include_router(report_router)
    register_exception_handlers(app)
    register_storefront_error_handlers(app)
    return TestClient(app)


def _create_product(client, name="Linen Shirt", price=10.0, stock=5, season="summer"):
    response = client.post(
        "/products",
        json={"name": name, "price": price, "stock": stock, "season": season},
        headers=ADMIN,
    )
    assert response.status_code == 201
    return response.json()["product_id"]


def _add_to_cart(client, product_id, quantity=1, headers=USER):
    response = client.post("/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers)
    assert response.status_code == 200
    return response


class TestAuthentication:
    def test_cart_requires_user(self, client):
        response = client.get("/cart")
        assert response.status_code == 401
        assert response.json()["code"] == "unauthorized"

    def test_checkout_requires_user(self, client):
        response = client.post("/cart/checkout", json={"lines": []})
        assert response.status_code == 401

    def test_admin_routes_reject_customers(self, client):
        response = client.post(
            "/products",
            json={"name": "X", "price": 1.0, "stock": 1, "season": "any"},
            headers=USER,
        )
        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_sales_report_requires_admin(self, client):
        assert client.get("/reports/sales", headers=USER).status_code == 403

    def test_catalog_is_public(self, client):
        _create_product(client)
        response = client.get("/products")
        assert response.status_code == 200
        assert len(response.json()["products"]) == 1


class TestProductEndpoints:
    def test_create_and_fetch(self, client):
        product_id = _create_product(client, name="Straw Hat", price=7.5, stock=3)
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Straw Hat"
        assert body["stock"] == 3

    def test_update(self, client):
        product_id = _create_product(client)
        response = client.put(f"/products/{product_id}", json={"price": 12.0}, headers=ADMIN)
        assert response.status_code == 200
        assert current_domain.repository_for(Product).get(product_id).price == 12.0

    def test_delete(self, client):
        product_id = _create_product(client)
        assert client.delete(f"/products/{product_id}", headers=ADMIN).status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_unknown_product(self, client):
        assert client.get("/products/missing").status_code == 404

    def test_invalid_payload(self, client):
        response = client.post(
            "/products",
            json={"name": "Bad", "price": -1, "stock": 1, "season": "any"},
            headers=ADMIN,
        )
        assert response.status_code == 422


class TestCartEndpoints:
    def test_view_cart(self, client):
        product_id = _create_product(client, price=10.0)
        _add_to_cart(client, product_id, 2)

        response = client.get("/cart", headers=USER)
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert body["items"][0]["product_id"] == product_id
        assert body["items"][0]["unit_price"] == 10.0

    def test_add_unknown_product(self, client):
        response = client.post("/cart/items", json={"product_id": "missing", "quantity": 1}, headers=USER)
        assert response.status_code == 404
        assert response.json() == {
            "error": "Product missing not found",
            "code": "product_not_found",
            "product_id": "missing",
        }

    def test_add_beyond_stock(self, client):
        product_id = _create_product(client, stock=1)
        response = client.post("/cart/items", json={"product_id": product_id, "quantity": 3}, headers=USER)
        assert response.status_code == 409
        assert response.json()["shortfall"] == 2

    def test_remove_line(self, client):
        product_id = _create_product(client)
        _add_to_cart(client, product_id)
        line_id = client.get("/cart", headers=USER).json()["items"][0]["line_id"]

        response = client.delete(f"/cart/items/{line_id}", headers=USER)
        assert response.status_code == 200
        assert client.get("/cart", headers=USER).json() == {"items": [], "count": 0}

    def test_carts_are_private(self, client):
        product_id = _create_product(client)
        _add_to_cart(client, product_id, headers=OTHER_USER)
        assert client.get("/cart", headers=USER).json()["count"] == 0


class TestCheckoutEndpoint:
    def test_checkout_places_order(self, client):
        product_id = _create_product(client, price=10.0, stock=5)
        _add_to_cart(client, product_id, 2)

        response = client.post(
            "/cart/checkout",
            json={"lines": [{"product_id": product_id, "quantity": 2, "unit_price": 10.0}]},
            headers=USER,
        )
        assert response.status_code == 201
        order_id = response.json()["order_id"]

        assert client.get("/cart", headers=USER).json()["count"] == 0
        assert client.get(f"/products/{product_id}").json()["stock"] == 3

        orders = client.get("/orders", headers=USER).json()["orders"]
        assert [o["order_id"] for o in orders] == [order_id]
        assert orders[0]["total"] == 20.0
        assert orders[0]["lines"][0]["subtotal"] == 20.0

    def test_malformed_line(self, client):
        product_id = _create_product(client)
        response = client.post(
            "/cart/checkout",
            json={"lines": [{"product_id": product_id, "quantity": 0}]},
            headers=USER,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_line"

    def test_empty_checkout(self, client):
        response = client.post("/cart/checkout", json={"lines": []}, headers=USER)
        assert response.status_code == 400

    def test_insufficient_stock(self, client):
        product_id = _create_product(client, stock=1)
        response = client.post(
            "/cart/checkout",
            json={"lines": [{"product_id": product_id, "quantity": 2}]},
            headers=USER,
        )
        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "insufficient_stock"
        assert (body["requested"], body["available"], body["shortfall"]) == (2, 1, 1)

    def test_idempotent_retry(self, client):
        product_id = _create_product(client, stock=5)
        payload = {"lines": [{"product_id": product_id, "quantity": 1}], "idempotency_key": "retry-1"}

        first = client.post("/cart/checkout", json=payload, headers=USER)
        second = client.post("/cart/checkout", json=payload, headers=USER)

        assert first.json()["order_id"] == second.json()["order_id"]
        assert client.get(f"/products/{product_id}").json()["stock"] == 4


class TestSalesReportEndpoint:
    def test_best_sellers_first(self, client):
        shirt = _create_product(client, name="Linen Shirt", price=10.0, stock=10)
        scarf = _create_product(client, name="Wool Scarf", price=4.0, stock=10)
        client.post(
            "/cart/checkout",
            json={"lines": [{"product_id": shirt, "quantity": 1}, {"product_id": scarf, "quantity": 3}]},
            headers=USER,
        )

        response = client.get("/reports/sales", headers=ADMIN)
        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["product_id"] for p in products] == [scarf, shirt]
        assert products[0]["units_sold"] == 3
        assert products[0]["revenue"] == 12.0
