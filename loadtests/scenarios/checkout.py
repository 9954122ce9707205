"""Checkout load test scenarios.

Shoppers fill carts and check out against a handful of low-stock "hot"
products, so checkouts race for the last units. A sold-out rejection (409
insufficient_stock) is a correct outcome under contention, not a failure.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, new_shopper_id, shopper_headers
from loadtests.helpers.response import error_code, extract_error_detail
from loadtests.helpers.state import HOT_PRODUCTS, ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Browse -> Add hot product to cart -> View cart -> Checkout -> Order history."""

    def on_start(self):
        self.state = ShopperState(user_id=new_shopper_id())
        self.headers = shopper_headers(self.state.user_id)

    @task
    def browse_catalog(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def add_hot_product(self):
        if not HOT_PRODUCTS.product_ids:
            self.interrupt()
            return
        product_id = random.choice(HOT_PRODUCTS.product_ids)
        with self.client.post(
            "/cart/items",
            json=cart_item_data(product_id, quantity=1),
            headers=self.headers,
            catch_response=True,
            name="POST /cart/items",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids.append(product_id)
            elif resp.status_code == 409 and error_code(resp) == "insufficient_stock":
                self.state.sold_out += 1
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_cart(self):
        with self.client.get("/cart", headers=self.headers, catch_response=True, name="GET /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        lines = [{"product_id": product_id, "quantity": 1} for product_id in self.state.product_ids]
        with self.client.post(
            "/cart/checkout",
            json=checkout_data(lines),
            headers=self.headers,
            catch_response=True,
            name="POST /cart/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
            elif resp.status_code == 409 and error_code(resp) == "insufficient_stock":
                self.state.sold_out += 1
                resp.success()
            elif resp.status_code == 503:
                resp.failure(f"Checkout unavailable after retries — {extract_error_detail(resp)}")
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def order_history(self):
        with self.client.get("/orders", headers=self.headers, catch_response=True, name="GET /orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code} — {extract_error_detail(resp)}")
        self.interrupt()


class CheckoutContentionUser(HttpUser):
    """Shoppers racing for low-stock products."""

    tasks = [CheckoutJourney]
    wait_time = between(0.1, 0.5)


class BrowsingUser(HttpUser):
    """Read-only traffic on the public catalog."""

    wait_time = between(0.5, 2.0)

    @task(3)
    def list_products(self):
        self.client.get("/products", name="GET /products")

    @task(1)
    def product_detail(self):
        if HOT_PRODUCTS.product_ids:
            product_id = random.choice(HOT_PRODUCTS.product_ids)
            self.client.get(f"/products/{product_id}", name="GET /products/{id}")
