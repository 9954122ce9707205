"""Product sales — units sold and revenue per product, for the admin report.

Rows keep the product name seen on the latest sale, so products removed from
the catalog still appear with their sales.
"""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.order.order import Order
from storefront.shared.money import money_sum


@storefront.projection
class ProductSales:
    product_id = Identifier(identifier=True, required=True)
    product_name = String(max_length=255)
    units_sold = Integer(default=0)
    revenue = Float(default=0.0)
    last_sold_at = DateTime()


def _get_or_create(product_id):
    repo = current_domain.repository_for(ProductSales)
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        return ProductSales(product_id=product_id, units_sold=0, revenue=0.0)


def _record_sale(line, sold_at):
    record = _get_or_create(line["product_id"])
    record.product_name = line["product_name"]
    record.units_sold = (record.units_sold or 0) + line["quantity"]
    record.revenue = money_sum([record.revenue or 0.0, line["subtotal"]])
    record.last_sold_at = sold_at
    current_domain.repository_for(ProductSales).add(record)


@storefront.projector(projector_for=ProductSales, aggregates=[Order])
class ProductSalesProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        for line in json.loads(event.lines):
            _record_sale(line, event.placed_at)


def sales_report():
    """Per-product units sold and revenue, best sellers first."""
    rows = current_domain.repository_for(ProductSales)._dao.query.limit(None).all().items
    rows = sorted(rows, key=lambda r: (-(r.units_sold or 0), (r.product_name or "").lower()))
    return [
        {
            "product_id": str(row.product_id),
            "name": row.product_name,
            "units_sold": row.units_sold,
            "revenue": row.revenue,
        }
        for row in rows
    ]
