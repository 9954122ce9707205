"""Cart line management — commands and handler.

Carts are keyed by customer. The first add opens the cart; later adds to the
same product accumulate on the existing line.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.repository import cart_for_customer
from storefront.catalog.product import Product
from storefront.domain import logger, storefront
from storefront.exceptions import ProductNotFoundError


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveCartLine:
    customer_id = Identifier(required=True)
    line_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError as exc:
            raise ProductNotFoundError(command.product_id) from exc

        # Advisory only; checkout re-checks inside its unit of work
        product.ensure_available(command.quantity)

        repo = current_domain.repository_for(Cart)
        cart = cart_for_customer(command.customer_id) or Cart.open_for(command.customer_id)
        line_id = cart.add_line(
            product_id=str(product.id),
            quantity=command.quantity,
            unit_price=product.price,
        )
        repo.add(cart)
        return line_id

    @handle(RemoveCartLine)
    def remove_cart_line(self, command):
        repo = current_domain.repository_for(Cart)
        cart = cart_for_customer(command.customer_id)
        if cart is None or not cart.remove_line(command.line_id):
            logger.debug(
                "cart.line_already_absent",
                customer_id=str(command.customer_id),
                line_id=str(command.line_id),
            )
            return
        repo.add(cart)
