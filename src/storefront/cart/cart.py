"""Cart aggregate — one mutable cart per customer.

A cart holds at most one line per product. Repeat adds accumulate quantity
on the existing line and keep the price captured by the first add.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from storefront.cart.events import CartCheckedOut, CartLineAdded, CartLineRemoved
from storefront.domain import storefront
from storefront.shared.money import to_money


@storefront.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)  # captured at first add
    added_at = DateTime()


@storefront.aggregate
class Cart:
    customer_id = Identifier(required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def open_for(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def item_count(self):
        """Total units in the cart; derived, never stored."""
        return sum(line.quantity for line in self.lines)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_line(self, product_id, quantity, unit_price):
        """Add `quantity` units of a product and return the line id."""
        now = datetime.now(UTC)
        existing = self.line_for(product_id)

        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartLine(
                product_id=product_id,
                quantity=quantity,
                unit_price=to_money(unit_price),
                added_at=now,
            )
            self.add_lines(line)

        self.updated_at = now

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                line_id=str(line.id),
                product_id=str(product_id),
                quantity_added=quantity,
                new_quantity=line.quantity,
                unit_price=line.unit_price,
            )
        )
        return str(line.id)

    def remove_line(self, line_id):
        """Remove a line by id. Returns False when the line is already gone."""
        line = next((i for i in self.lines if str(i.id) == str(line_id)), None)
        if line is None:
            return False

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                line_id=str(line_id),
                product_id=str(line.product_id),
            )
        )
        return True

    def check_out(self, product_ids, order_id):
        """Drop the lines for products that were just ordered."""
        wanted = {str(product_id) for product_id in product_ids}
        purchased = [line for line in self.lines if str(line.product_id) in wanted]
        if not purchased:
            return []

        for line in purchased:
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        removed = sorted(str(line.product_id) for line in purchased)
        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                order_id=str(order_id),
                product_ids=json.dumps(removed),
            )
        )
        return removed
