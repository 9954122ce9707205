"""State tracking for Locust load test scenarios.

Each simulated shopper keeps its own state. The hot products are shared by
every user on purpose: they are what concurrent checkouts compete for.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopper."""

    user_id: str
    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
    sold_out: int = 0


@dataclass
class HotProducts:
    """Products seeded at test start with deliberately low stock."""

    product_ids: list[str] = field(default_factory=list)
    initial_stock: int = 0


HOT_PRODUCTS = HotProducts()
