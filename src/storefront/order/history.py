"""Order history for a customer.

Orders are flattened into one row per line and grouped back here. Totals are
recomputed from line subtotals.
"""

from storefront.order.repository import orders_for_customer
from storefront.shared.money import money_sum


def _value(row, name):
    return row[name] if isinstance(row, dict) else getattr(row, name)


def order_rows(orders):
    """Flatten orders into one row per order line."""
    for order in orders:
        for line in order.lines:
            yield {
                "order_id": str(order.id),
                "placed_at": order.placed_at,
                "product_id": str(line.product_id),
                "product_name": line.product_name,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "subtotal": line.subtotal,
            }


def group_order_rows(rows):
    """Group flat order-line rows into orders, newest first.

    Rows may be mappings or records exposing ``order_id``, ``placed_at``,
    ``product_id``, ``product_name``, ``quantity``, ``unit_price`` and
    ``subtotal``. Each result carries its lines and a total equal to the sum of
    their subtotals.
    """
    orders = {}
    for row in rows:
        order_id = str(_value(row, "order_id"))
        order = orders.setdefault(
            order_id,
            {"order_id": order_id, "placed_at": _value(row, "placed_at"), "lines": []},
        )
        order["lines"].append(
            {
                "product_id": str(_value(row, "product_id")),
                "name": _value(row, "product_name"),
                "quantity": _value(row, "quantity"),
                "unit_price": _value(row, "unit_price"),
                "subtotal": _value(row, "subtotal"),
            }
        )

    for order in orders.values():
        order["total"] = money_sum(line["subtotal"] for line in order["lines"])

    # Ties on placed_at fall back to order id so the sequence is stable
    return sorted(orders.values(), key=lambda o: (o["placed_at"], o["order_id"]), reverse=True)


def list_orders(customer_id):
    """All of the customer's orders, read from the order ledger itself."""
    return group_order_rows(order_rows(orders_for_customer(customer_id)))
