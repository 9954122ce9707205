"""Checkout — converts a customer's cart lines into an order.

One attempt runs inside a single unit of work:

1. read every product (ascending id) and check it can cover its line
2. insert the order with one line per product
3. withdraw stock from each product
4. drop the purchased products from the customer's cart
5. commit

Any failure rolls the whole unit of work back before the error reaches the
caller. Products are version-checked, so a checkout that loses a race to a
concurrent writer sees a version conflict; the attempt is then retried from
step 1 against fresh stock, up to ``CHECKOUT_MAX_ATTEMPTS`` times.

An error is only reported when nothing was written. If the commit raised after
the order became durable, the failure is logged and the order id returned.
"""

import os

from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.repository import cart_for_customer
from storefront.catalog.product import Product
from storefront.checkout.lines import SubmittedLine, parse_lines
from storefront.domain import logger
from storefront.exceptions import (
    CheckoutAbortFailedError,
    InsufficientStockError,
    InvalidLineError,
    ProductNotFoundError,
    StoreUnavailableError,
    Unauthorized,
)
from storefront.order.order import Order
from storefront.order.repository import find_by_idempotency_key, order_exists

DEFAULT_MAX_ATTEMPTS = 3


def _max_attempts_from_env() -> int:
    return max(1, int(os.environ.get("CHECKOUT_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)))


def _describe(lines: list[SubmittedLine]) -> list[dict]:
    return [
        {
            "product_id": line.product_id,
            "quantity": line.quantity,
            "unit_price": None if line.price_hint is None else str(line.price_hint),
        }
        for line in lines
    ]


class CheckoutCoordinator:
    """Runs checkouts with bounded retry on version conflicts."""

    def __init__(self, max_attempts: int | None = None) -> None:
        self.max_attempts = max_attempts if max_attempts is not None else _max_attempts_from_env()

    def checkout(self, customer_id, submitted_lines, idempotency_key: str | None = None) -> str:
        """Place an order for ``customer_id`` and return its id.

        Raises Unauthorized, InvalidLineError, ProductNotFoundError,
        InsufficientStockError, StoreUnavailableError or
        CheckoutAbortFailedError. Nothing is written unless an order id is
        returned.
        """
        if not customer_id:
            raise Unauthorized("Checkout requires an authenticated user")
        customer_id = str(customer_id)
        lines = parse_lines(submitted_lines)

        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._attempt(customer_id, lines, idempotency_key)
            except ExpectedVersionError as exc:
                logger.warning(
                    "checkout.version_conflict",
                    customer_id=customer_id,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    cause=str(exc),
                )

        raise StoreUnavailableError(
            "Checkout kept conflicting with concurrent orders, try again",
            attempts=self.max_attempts,
        )

    # -------------------------------------------------------------------
    # One attempt
    # -------------------------------------------------------------------
    def _attempt(self, customer_id, lines, idempotency_key):
        uow = UnitOfWork()
        uow.start()

        try:
            existing = find_by_idempotency_key(customer_id, idempotency_key)
            if existing is not None:
                self._abort(uow, customer_id, lines, cause="idempotent replay")
                logger.info(
                    "checkout.replayed",
                    customer_id=customer_id,
                    order_id=str(existing.id),
                    idempotency_key=idempotency_key,
                )
                return str(existing.id)

            products = self._load_products(lines)
            order = self._place_order(customer_id, lines, products, idempotency_key)
            self._withdraw_stock(lines, products, order)
            self._clear_cart(customer_id, lines, order)
        except (InsufficientStockError, ProductNotFoundError) as exc:
            self._abort(uow, customer_id, lines, cause=exc)
            logger.info("checkout.rejected", customer_id=customer_id, code=exc.code, **exc.details)
            raise
        except ExpectedVersionError as exc:
            self._abort(uow, customer_id, lines, cause=exc)
            raise
        except ValidationError as exc:
            self._abort(uow, customer_id, lines, cause=exc)
            logger.info("checkout.rejected", customer_id=customer_id, code=InvalidLineError.code)
            raise InvalidLineError("Checkout lines failed validation", errors=exc.messages) from exc
        except ArithmeticError as exc:
            self._abort(uow, customer_id, lines, cause=exc)
            logger.info("checkout.rejected", customer_id=customer_id, code=InvalidLineError.code)
            raise InvalidLineError("Checkout amounts are out of range") from exc
        except Exception as exc:
            self._abort(uow, customer_id, lines, cause=exc)
            logger.error("checkout.aborted", customer_id=customer_id, cause=repr(exc))
            raise StoreUnavailableError("Checkout could not be completed, try again") from exc

        try:
            uow.commit()
        except Exception as exc:
            self._abort(uow, customer_id, lines, cause=exc)
            # Commit writes the sessions before running sync projectors
            if order_exists(order.id):
                logger.error(
                    "checkout.post_commit_failed",
                    customer_id=customer_id,
                    order_id=str(order.id),
                    cause=repr(exc),
                )
                return str(order.id)
            if isinstance(exc, ExpectedVersionError):
                raise
            logger.error("checkout.aborted", customer_id=customer_id, stage="commit", cause=repr(exc))
            raise StoreUnavailableError("Checkout could not be completed, try again") from exc

        logger.info(
            "checkout.committed",
            customer_id=customer_id,
            order_id=str(order.id),
            total=order.total,
            line_count=len(lines),
        )
        return str(order.id)

    def _load_products(self, lines):
        """Read and check every product before anything is written."""
        repo = current_domain.repository_for(Product)
        products = {}
        for line in sorted(lines, key=lambda line: line.product_id):
            try:
                products[line.product_id] = repo.get(line.product_id)
            except ObjectNotFoundError as exc:
                raise ProductNotFoundError(line.product_id) from exc

        for line in lines:
            products[line.product_id].ensure_available(line.quantity)
        return products

    def _resolve_prices(self, customer_id, lines, products):
        cart = cart_for_customer(customer_id)
        prices = {}
        for line in lines:
            if line.price_hint is not None:
                prices[line.product_id] = line.price_hint
                continue
            cart_line = cart.line_for(line.product_id) if cart else None
            if cart_line is not None:
                prices[line.product_id] = cart_line.unit_price
            else:
                prices[line.product_id] = products[line.product_id].price
        return prices

    def _place_order(self, customer_id, lines, products, idempotency_key):
        prices = self._resolve_prices(customer_id, lines, products)
        order = Order.place(
            customer_id=customer_id,
            lines=[
                {
                    "product_id": line.product_id,
                    "product_name": products[line.product_id].name,
                    "quantity": line.quantity,
                    "unit_price": prices[line.product_id],
                }
                for line in lines
            ],
            idempotency_key=idempotency_key,
        )
        current_domain.repository_for(Order).add(order)
        return order

    def _withdraw_stock(self, lines, products, order):
        repo = current_domain.repository_for(Product)
        for line in sorted(lines, key=lambda line: line.product_id):
            product = products[line.product_id]
            product.withdraw_stock(line.quantity, order_id=str(order.id))
            repo.add(product)

    def _clear_cart(self, customer_id, lines, order):
        cart = cart_for_customer(customer_id)
        if cart is None:
            return
        if cart.check_out([line.product_id for line in lines], order_id=str(order.id)):
            current_domain.repository_for(Cart).add(cart)

    # -------------------------------------------------------------------
    # Abort
    # -------------------------------------------------------------------
    def _abort(self, uow, customer_id, lines, cause):
        """Roll back ``uow``. A failed rollback is escalated, never hidden."""
        if not uow.in_progress:
            return
        try:
            uow.rollback()
        except Exception as exc:
            logger.critical(
                "checkout.abort_failed",
                customer_id=customer_id,
                lines=_describe(lines),
                cause=repr(cause),
                rollback_error=repr(exc),
            )
            raise CheckoutAbortFailedError(
                "Checkout failed and could not be rolled back; state needs reconciliation",
                customer_id=customer_id,
            ) from exc


def checkout(customer_id, submitted_lines, idempotency_key: str | None = None) -> str:
    """Place an order with the default retry policy."""
    return CheckoutCoordinator().checkout(customer_id, submitted_lines, idempotency_key)
