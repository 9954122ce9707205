"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """An administrator added a product to the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    season = String()
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """An administrator changed a product's details, price or stock."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    season = String()
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Stock left the shelf because an order was committed."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    withdrawn_at = DateTime(required=True)
