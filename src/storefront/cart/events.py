"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, Text

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartLineAdded:
    """A product was put in the cart, or its quantity grew on a repeat add."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    new_quantity = Integer(required=True)
    unit_price = Float(required=True)


@storefront.event(part_of="Cart")
class CartLineRemoved:
    """The customer removed a line from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCheckedOut:
    """Lines left the cart because an order containing them was committed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: list of product ids
