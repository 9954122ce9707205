"""Tests for the Order aggregate."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.order.events import OrderPlaced
from storefront.order.order import Order


def _line(product_id="prod-001", quantity=2, unit_price=10.0, product_name="Linen Shirt"):
    return {
        "product_id": product_id,
        "product_name": product_name,
        "quantity": quantity,
        "unit_price": unit_price,
    }


class TestPlace:
    def test_subtotal_is_quantity_times_price(self):
        order = Order.place("cust-001", [_line(quantity=2, unit_price=10.0)])
        assert order.lines[0].subtotal == 20.0

    def test_total_is_sum_of_subtotals(self):
        order = Order.place(
            "cust-001",
            [_line("prod-001", 3, 0.1), _line("prod-002", 1, 19.99)],
        )
        assert order.total == 20.29

    def test_snapshot_fields(self):
        order = Order.place("cust-001", [_line(product_name="Straw Hat", unit_price=7.5)])
        line = order.lines[0]
        assert line.product_name == "Straw Hat"
        assert line.unit_price == 7.5

    def test_idempotency_key_is_kept(self):
        order = Order.place("cust-001", [_line()], idempotency_key="key-1")
        assert order.idempotency_key == "key-1"

    def test_placed_at_is_set(self):
        assert Order.place("cust-001", [_line()]).placed_at is not None

    def test_empty_order_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.place("cust-001", [])

    def test_zero_quantity_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.place("cust-001", [_line(quantity=0)])


class TestOrderPlacedEvent:
    def test_raised_once(self):
        order = Order.place("cust-001", [_line()])
        events = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(events) == 1

    def test_carries_lines_and_total(self):
        order = Order.place("cust-001", [_line("prod-001", 2, 10.0), _line("prod-002", 1, 5.0)])
        event = next(e for e in order._events if isinstance(e, OrderPlaced))
        lines = json.loads(event.lines)
        assert {line["product_id"] for line in lines} == {"prod-001", "prod-002"}
        assert event.total == 25.0
        assert event.customer_id == "cust-001"
        assert all(line["line_id"] for line in lines)
