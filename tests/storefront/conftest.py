import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture
from storefront.catalog.management import AddProduct


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def add_product():
    """Factory: put a product in the catalog and return its id."""

    def _add(name="Linen Shirt", price=10.0, stock=5, season="summer", description=None):
        return current_domain.process(
            AddProduct(name=name, description=description, price=price, stock=stock, season=season),
            asynchronous=False,
        )

    return _add
