"""Application tests for catalogue seeding."""

from catalogue.product.product import Product
from catalogue.product.seeding import MOCK_PRODUCTS, SeedCatalogue
from protean import current_domain


def _add_product(**overrides):
    defaults = {"name": "Desk Lamp", "price": 24.5, "image": "lamp.jpg"}
    defaults.update(overrides)
    product = Product.create(**defaults)
    current_domain.repository_for(Product).add(product)
    return str(product.id)


class TestSeedCatalogue:
    def test_seed_empty_catalogue(self):
        seeded = current_domain.process(SeedCatalogue(), asynchronous=False)
        assert seeded == len(MOCK_PRODUCTS) == 8
        assert current_domain.repository_for(Product).count() == 8

    def test_seed_is_idempotent(self):
        current_domain.process(SeedCatalogue(), asynchronous=False)
        assert current_domain.process(SeedCatalogue(), asynchronous=False) == 0
        assert current_domain.repository_for(Product).count() == 8

    def test_seed_skips_populated_catalogue(self):
        _add_product()
        assert current_domain.process(SeedCatalogue(), asynchronous=False) == 0

    def test_forced_seed(self):
        _add_product()
        assert current_domain.process(SeedCatalogue(force=True), asynchronous=False) == 8
        assert current_domain.repository_for(Product).count() == 9

    def test_listing_is_sorted_by_name(self):
        current_domain.process(SeedCatalogue(), asynchronous=False)
        names = [product.name for product in current_domain.repository_for(Product).listing()]
        assert names == sorted(names)
