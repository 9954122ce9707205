"""Application tests for catalog administration commands and reads."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalog.management import AddProduct, RemoveProduct, UpdateProduct
from storefront.catalog.product import Product
from storefront.catalog.queries import get_product, list_products
from storefront.exceptions import ProductNotFoundError


class TestAddProductCommand:
    def test_returns_id_and_persists(self, add_product):
        product_id = add_product(name="Linen Shirt", price=10.0, stock=5)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Linen Shirt"
        assert product.stock == 5

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                AddProduct(name="Bad", price=1.0, stock=-1, season="any"),
                asynchronous=False,
            )


class TestUpdateProductCommand:
    def test_updates_given_fields(self, add_product):
        product_id = add_product(price=10.0, stock=5)
        current_domain.process(UpdateProduct(product_id=product_id, price=12.0), asynchronous=False)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 12.0
        assert product.stock == 5

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            current_domain.process(UpdateProduct(product_id="missing", price=1.0), asynchronous=False)


class TestRemoveProductCommand:
    def test_product_is_gone(self, add_product):
        product_id = add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)


class TestCatalogReads:
    def test_list_products_sorted_by_name(self, add_product):
        add_product(name="wool scarf")
        add_product(name="Beach Towel")
        add_product(name="linen shirt")
        assert [p["name"] for p in list_products()] == ["Beach Towel", "linen shirt", "wool scarf"]

    def test_more_than_one_page_of_products(self, add_product):
        for n in range(105):
            add_product(name=f"Postcard {n:03d}", price=1.0, stock=1)

        products = list_products()
        assert len(products) == 105
        assert products[-1]["name"] == "Postcard 104"

    def test_get_product(self, add_product):
        product_id = add_product(name="Straw Hat", price=7.5, stock=3, season="summer")
        record = get_product(product_id)
        assert record == {
            "product_id": product_id,
            "name": "Straw Hat",
            "description": None,
            "price": 7.5,
            "stock": 3,
            "season": "summer",
        }

    def test_get_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            get_product("missing")
