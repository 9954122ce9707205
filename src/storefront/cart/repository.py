"""Cart lookup by customer."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart


def cart_for_customer(customer_id) -> Cart | None:
    """Return the customer's cart, or None if they never added anything.

    The cart is reloaded through the repository so that changes made to it
    are tracked by the active unit of work.
    """
    repo = current_domain.repository_for(Cart)
    carts = repo._dao.query.filter(customer_id=str(customer_id)).all().items
    if not carts:
        return None
    return repo.get(carts[0].id)
