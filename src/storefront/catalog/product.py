"""Product aggregate — the catalog store.

Products are the only state shared between customers: administrators edit
them and every checkout withdraws stock from them. Stock never goes negative.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalog.events import ProductAdded, ProductUpdated, StockWithdrawn
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError
from storefront.shared.money import to_money


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    season = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_must_not_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add_to_catalog(cls, name, price, stock=0, description=None, season=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=to_money(price),
            stock=stock,
            season=season,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
                season=product.season,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_details(self, name=None, description=None, price=None, stock=None, season=None):
        """Apply the supplied changes; fields left as None keep their value."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = to_money(price)
        if stock is not None:
            self.stock = stock
        if season is not None:
            self.season = season

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                stock=self.stock,
                season=self.season,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def can_supply(self, quantity):
        return (self.stock or 0) >= quantity

    def ensure_available(self, quantity):
        """Raise InsufficientStockError unless `quantity` units are on the shelf."""
        if not self.can_supply(quantity):
            raise InsufficientStockError(str(self.id), requested=quantity, available=self.stock or 0)

    def withdraw_stock(self, quantity, order_id):
        """Take `quantity` units off the shelf for a committed order."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self.ensure_available(quantity)

        previous = self.stock or 0
        now = datetime.now(UTC)
        self.stock = previous - quantity
        self.updated_at = now

        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                withdrawn_at=now,
            )
        )
