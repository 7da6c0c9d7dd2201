"""Catalog seeding: load the demo products into an empty catalog."""

import structlog
from protean import handle
from protean.fields import Boolean
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)

_PLACEHOLDER_IMAGE = "https://www.pexels.com/photo/concrete-road-between-trees-1563356/"

MOCK_PRODUCTS = [
    ("Wireless Headphones", 99.99, "High-quality wireless headphones with noise cancellation"),
    ("Smart Watch", 199.99, "Feature-rich smartwatch with health monitoring"),
    ("Laptop Backpack", 49.99, "Durable laptop backpack with multiple compartments"),
    ("Bluetooth Speaker", 79.99, "Portable Bluetooth speaker with excellent sound quality"),
    ("Phone Case", 19.99, "Protective phone case with stylish design"),
    ("USB-C Cable", 15.99, "Fast charging USB-C cable, 2m length"),
    ("Wireless Mouse", 29.99, "Ergonomic wireless mouse with precision tracking"),
    ("Monitor Stand", 39.99, "Adjustable monitor stand for better ergonomics"),
]


@catalogue.command(part_of="Product")
class SeedCatalogue:
    """Insert the demo products, unless the catalog already has any (or ``force``)."""

    force: Boolean(default=False)


@catalogue.command_handler(part_of=Product)
class SeedCatalogueHandler:
    @handle(SeedCatalogue)
    def seed_catalogue(self, command):
        repo = current_domain.repository_for(Product)
        if repo.count() > 0 and not command.force:
            logger.debug("Catalogue already populated, skipping seed")
            return 0

        for name, price, description in MOCK_PRODUCTS:
            repo.add(
                Product.create(
                    name=name,
                    price=price,
                    image=_PLACEHOLDER_IMAGE,
                    description=description,
                )
            )

        logger.info("Mock products added to catalogue", count=len(MOCK_PRODUCTS))
        return len(MOCK_PRODUCTS)
