"""Catalog Store adapter backed by the catalogue domain."""

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from catalogue.product.product import Product
from ordering.catalog.port import CatalogStore, ProductRecord


class CatalogueStore(CatalogStore):
    """Looks products up in the catalogue domain's repository.

    Pushes the catalogue domain context for the duration of each lookup, so
    it can be called while the ordering context is active. It must not be
    called from inside an ordering unit of work.
    """

    def __init__(self, domain: Domain):
        self._domain = domain

    def get(self, product_id: str) -> ProductRecord | None:
        with self._domain.domain_context():
            try:
                product = self._domain.repository_for(Product).get(product_id)
            except ObjectNotFoundError:
                return None

        return ProductRecord(
            id=str(product.id),
            name=product.name,
            price=product.price,
            image=product.image,
            description=product.description,
        )
