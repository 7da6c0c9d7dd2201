import pytest
from ordering.catalog import FakeCatalog, ProductRecord

# Prices mirror the seeded catalogue
HEADPHONES = ProductRecord(id="prod-headphones", name="Wireless Headphones", price=99.99, image="headphones.jpg")
WATCH = ProductRecord(id="prod-watch", name="Smart Watch", price=199.99, image="watch.jpg")
CABLE = ProductRecord(id="prod-cable", name="USB-C Cable", price=15.99, image="cable.jpg")


@pytest.fixture(autouse=True)
def _ctx():
    """Push the ordering domain context for every test in this package."""
    from ordering.domain import ordering

    with ordering.domain_context():
        yield


@pytest.fixture()
def catalog():
    return FakeCatalog([HEADPHONES, WATCH, CABLE])


@pytest.fixture()
def ledger(catalog):
    from ordering.cart.ledger import CartLedger
    from ordering.domain import ordering

    return CartLedger(ordering, catalog, write_retries=5)


@pytest.fixture()
def cart_service(ledger, catalog):
    from ordering.cart.service import CartService

    return CartService(ledger, catalog)


@pytest.fixture()
def checkout_processor(ledger):
    from ordering.checkout.order_numbers import OrderNumberMinter
    from ordering.checkout.processor import CheckoutProcessor

    return CheckoutProcessor(ledger, OrderNumberMinter())
