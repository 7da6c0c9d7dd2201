"""Cart Service: the four cart operations, each answering with a fresh snapshot.

Callers never need a separate read after a write; whatever the operation,
the returned snapshot reflects the ledger right after it.
"""

import structlog

from ordering.cart.errors import InvalidQuantity, ProductNotFound
from ordering.cart.ledger import CartLedger
from ordering.cart.snapshot import CartSnapshot
from ordering.catalog.port import CatalogStore

logger = structlog.get_logger(__name__)


class CartService:
    def __init__(self, ledger: CartLedger, catalog: CatalogStore):
        self._ledger = ledger
        self._catalog = catalog

    def view_cart(self, user_id) -> CartSnapshot:
        lines = self._ledger.list_for(user_id)
        if not lines:
            return CartSnapshot.empty()
        return CartSnapshot.from_lines(lines)

    def add_to_cart(self, user_id, product_id, quantity=1) -> CartSnapshot:
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity)

        if self._catalog.get(product_id) is None:
            logger.info("Add to cart rejected, unknown product", user_id=str(user_id), product_id=str(product_id))
            raise ProductNotFound(product_id)

        entry_id = self._ledger.upsert_add(user_id, product_id, quantity)
        snapshot = self.view_cart(user_id)
        logger.info(
            "Added to cart",
            user_id=str(user_id),
            product_id=str(product_id),
            entry_id=entry_id,
            quantity_added=quantity,
            quantity=snapshot.quantity_of(product_id),
        )
        return snapshot

    def update_quantity(self, user_id, entry_id, quantity) -> CartSnapshot:
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity)

        self._ledger.set_quantity(user_id, entry_id, quantity)
        return self.view_cart(user_id)

    def remove_from_cart(self, user_id, entry_id) -> CartSnapshot:
        removed = self._ledger.remove(user_id, entry_id)
        if not removed:
            logger.debug("Remove from cart was a no-op", user_id=str(user_id), entry_id=str(entry_id))
        return self.view_cart(user_id)
