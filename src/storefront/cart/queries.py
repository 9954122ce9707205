"""Read-side helpers for carts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.repository import cart_for_customer
from storefront.catalog.product import Product


def _lines_in_insertion_order(cart):
    # Timestamps collide on fast adds; stable sort keeps the stored order then
    return sorted(cart.lines, key=lambda line: line.added_at or cart.created_at)


def list_cart(customer_id):
    """Return the customer's cart lines joined with live product data.

    Each item is ``{line_id, product_id, name, unit_price, quantity}``.
    ``unit_price`` is the product's current price; lines whose product has
    since been removed from the catalog are left out.
    """
    cart = cart_for_customer(customer_id)
    if cart is None:
        return []

    products = current_domain.repository_for(Product)
    items = []
    for line in _lines_in_insertion_order(cart):
        try:
            product = products.get(line.product_id)
        except ObjectNotFoundError:
            continue
        items.append(
            {
                "line_id": str(line.id),
                "product_id": str(line.product_id),
                "name": product.name,
                "unit_price": product.price,
                "quantity": line.quantity,
            }
        )
    return items


def cart_count(customer_id) -> int:
    """Units in the customer's cart, recomputed on every call."""
    cart = cart_for_customer(customer_id)
    return cart.item_count() if cart else 0
