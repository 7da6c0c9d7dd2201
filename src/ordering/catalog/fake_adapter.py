"""In-memory Catalog Store for development and testing."""

from ordering.catalog.port import CatalogStore, ProductRecord


class FakeCatalog(CatalogStore):
    def __init__(self, products=()):
        self._products: dict[str, ProductRecord] = {}
        for product in products:
            self.put(product)

    def put(self, product: ProductRecord) -> None:
        self._products[str(product.id)] = product

    def discard(self, product_id: str) -> None:
        """Drop a product, as if it had been deleted from the catalog."""
        self._products.pop(str(product_id), None)

    def get(self, product_id: str) -> ProductRecord | None:
        return self._products.get(str(product_id))
