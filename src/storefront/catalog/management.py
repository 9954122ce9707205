"""Catalog administration — commands and handler.

Administrators add, edit and remove products. Authorization happens at the
API boundary; these commands assume an administrator issued them.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import logger, storefront
from storefront.exceptions import ProductNotFoundError


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)
    season = String(required=True, max_length=50)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    stock = Integer(min_value=0)
    season = String(max_length=50)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


def _load(repo, product_id):
    try:
        return repo.get(product_id)
    except ObjectNotFoundError as exc:
        raise ProductNotFoundError(product_id) from exc


@storefront.command_handler(part_of=Product)
class ManageCatalogHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add_to_catalog(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            season=command.season,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("catalog.product_added", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            season=command.season,
        )
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        # Order lines keep their own name/price snapshot, so history survives removal
        repo._dao.delete(product)
        logger.info("catalog.product_removed", product_id=str(command.product_id))
