"""Catalog Store port and adapters used by the cart."""

from ordering.catalog.catalogue_adapter import CatalogueStore
from ordering.catalog.fake_adapter import FakeCatalog
from ordering.catalog.port import CatalogStore, ProductRecord

__all__ = ["CatalogStore", "CatalogueStore", "FakeCatalog", "ProductRecord"]
