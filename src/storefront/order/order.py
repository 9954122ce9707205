"""Order aggregate — the immutable record of a completed checkout.

An order is built in one step from already-priced lines and is never edited
afterwards. Prices and product names are snapshots taken at checkout time.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.shared.money import line_subtotal, money_sum, to_money


@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total = Float(required=True, min_value=0.0)
    idempotency_key = String(max_length=255)
    placed_at = DateTime(required=True)

    @classmethod
    def place(cls, customer_id, lines, idempotency_key=None):
        """Build an order from ``lines`` and record OrderPlaced.

        Each line is a mapping with ``product_id``, ``product_name``,
        ``quantity`` and ``unit_price``. Subtotals and the total are computed
        here, never taken from the caller.
        """
        if not lines:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        order_lines = [
            OrderLine(
                product_id=str(line["product_id"]),
                product_name=line["product_name"],
                quantity=line["quantity"],
                unit_price=to_money(line["unit_price"]),
                subtotal=line_subtotal(line["quantity"], line["unit_price"]),
            )
            for line in lines
        ]
        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            lines=order_lines,
            total=money_sum(line.subtotal for line in order_lines),
            idempotency_key=idempotency_key,
            placed_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(order.customer_id),
                lines=json.dumps(
                    [
                        {
                            "line_id": str(line.id),
                            "product_id": str(line.product_id),
                            "product_name": line.product_name,
                            "quantity": line.quantity,
                            "unit_price": line.unit_price,
                            "subtotal": line.subtotal,
                        }
                        for line in order.lines
                    ]
                ),
                total=order.total,
                placed_at=now,
            )
        )
        return order
