"""Storefront bounded context — product catalog, shopping carts, orders and checkout.

Products, carts and orders are registered with one domain so that a checkout
can read and change all three inside a single unit of work.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
