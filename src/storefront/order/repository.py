"""Order lookups."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.order.order import Order


def orders_for_customer(customer_id) -> list[Order]:
    """Every order of the customer, newest first, with its lines loaded."""
    repo = current_domain.repository_for(Order)
    records = (
        repo._dao.query.filter(customer_id=str(customer_id))
        .order_by("-placed_at")
        .limit(None)
        .all()
        .items
    )
    # Reload through the repository so each order comes back with its lines
    return [repo.get(record.id) for record in records]


def find_by_idempotency_key(customer_id, idempotency_key) -> Order | None:
    """Return the customer's order created with this key, if any.

    Keys are scoped per customer: the same key from two customers names two
    different orders.
    """
    if not idempotency_key:
        return None
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.filter(customer_id=str(customer_id), idempotency_key=idempotency_key)
        .all()
        .items
    )
    return orders[0] if orders else None


def order_exists(order_id) -> bool:
    try:
        current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        return False
    return True
