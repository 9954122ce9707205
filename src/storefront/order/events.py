"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A checkout committed. Orders never change after this event."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of {line_id, product_id, product_name, quantity, unit_price, subtotal}
    total = Float(required=True)
    placed_at = DateTime(required=True)
