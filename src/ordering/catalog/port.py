"""Catalog Store port (abstract interface).

The cart only needs to resolve a product identifier to its current record.
Adapters: ``CatalogueStore`` reads the catalogue domain, ``FakeCatalog``
serves tests and local experiments.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductRecord:
    """A product as the cart sees it. Read-only."""

    id: str
    name: str
    price: float
    image: str
    description: str | None = None


class CatalogStore(ABC):
    @abstractmethod
    def get(self, product_id: str) -> ProductRecord | None:
        """Return the product, or None if the catalog has no such id."""
        ...
