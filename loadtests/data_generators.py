"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules and
match the exact field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SEASONS = ["spring", "summer", "autumn", "winter", "all-season"]


def shopper_headers(user_id: str) -> dict:
    """Headers the session layer would forward for an authenticated shopper."""
    return {"X-User-Id": user_id}


def admin_headers() -> dict:
    return {"X-User-Id": "loadtest-admin", "X-User-Role": "admin"}


def new_shopper_id() -> str:
    return f"shopper-{uuid.uuid4().hex[:10]}"


def product_data(stock: int | None = None) -> dict:
    return {
        "name": f"{fake.color_name()} {fake.word().title()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(nb_words=12),
        "price": round(random.uniform(2.0, 120.0), 2),
        "stock": stock if stock is not None else random.randint(50, 500),
        "season": random.choice(SEASONS),
    }


def cart_item_data(product_id: str, quantity: int | None = None) -> dict:
    return {"product_id": product_id, "quantity": quantity or random.randint(1, 3)}


def checkout_data(lines: list[dict], with_idempotency_key: bool = True) -> dict:
    payload = {"lines": lines}
    if with_idempotency_key:
        payload["idempotency_key"] = uuid.uuid4().hex
    return payload
