"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from ordering.catalog import FakeCatalog, ProductRecord
from pytest_bdd import given, parsers


@pytest.fixture()
def shopper():
    return "shopper-001"


@pytest.fixture()
def catalog():
    return FakeCatalog()


@pytest.fixture()
def outcome():
    """Mutable container for the result of the When step."""
    return {}


@given(parsers.cfparse('the catalog lists "{product_id}" at {price:f}'))
def catalog_lists(catalog, product_id, price):
    catalog.put(ProductRecord(id=product_id, name=product_id.removeprefix("prod-").title(), price=price, image=""))


@given(parsers.cfparse('the shopper added {quantity:d} of "{product_id}"'))
def shopper_added(cart_service, shopper, product_id, quantity):
    cart_service.add_to_cart(shopper, product_id, quantity)
