"""Repository for the Product aggregate."""

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.repository(part_of=Product)
class ProductRepository:
    def listing(self) -> list[Product]:
        """All products, ordered by name."""
        return self._dao.query.order_by("name").all().items

    def count(self) -> int:
        return self._dao.query.all().total
