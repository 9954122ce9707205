"""Storefront Load Testing — Locust entry point.

Seeds a few low-stock products through the admin API, then runs shoppers
that race to check them out.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Checkout contention only:
    locust -f loadtests/locustfile.py CheckoutContentionUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py CheckoutContentionUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import os
import time

import requests
from locust import events

from loadtests.data_generators import admin_headers, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import HOT_PRODUCTS

# Import all user classes so Locust discovers them
from loadtests.scenarios.checkout import BrowsingUser, CheckoutContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")

HOT_PRODUCT_COUNT = int(os.environ.get("LOADTEST_HOT_PRODUCTS", "3"))
HOT_PRODUCT_STOCK = int(os.environ.get("LOADTEST_HOT_STOCK", "25"))


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400 and response.status_code != 409:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Seed the hot products every shopper competes for."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")

    HOT_PRODUCTS.initial_stock = HOT_PRODUCT_STOCK
    for _ in range(HOT_PRODUCT_COUNT):
        response = requests.post(
            f"{environment.host}/products",
            json=product_data(stock=HOT_PRODUCT_STOCK),
            headers=admin_headers(),
            timeout=10,
        )
        if response.status_code != 201:
            logger.error("[SEED] %s: %s", response.status_code, extract_error_detail(response))
            continue
        HOT_PRODUCTS.product_ids.append(response.json()["product_id"])

    print(f"[LOADTEST] Seeded {len(HOT_PRODUCTS.product_ids)} hot products with {HOT_PRODUCT_STOCK} units each")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check that no hot product was oversold."""
    for product_id in HOT_PRODUCTS.product_ids:
        response = requests.get(f"{environment.host}/products/{product_id}", timeout=10)
        if response.status_code != 200:
            continue
        stock = response.json()["stock"]
        status = "OK" if stock >= 0 else "OVERSOLD"
        print(f"[LOADTEST] {product_id}: {stock}/{HOT_PRODUCTS.initial_stock} left [{status}]")
