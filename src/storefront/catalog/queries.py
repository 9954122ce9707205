"""Read-side helpers for the product catalog."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.exceptions import ProductNotFoundError


def product_record(product):
    return {
        "product_id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "stock": product.stock,
        "season": product.season,
    }


def list_products():
    products = current_domain.repository_for(Product)._dao.query.limit(None).all().items
    return [product_record(p) for p in sorted(products, key=lambda p: (p.name or "").lower())]


def get_product(product_id):
    try:
        return product_record(current_domain.repository_for(Product).get(product_id))
    except ObjectNotFoundError as exc:
        raise ProductNotFoundError(product_id) from exc
