"""Cart Ledger: the per-user store of (product, quantity) entries.

Writes are Protean commands processed synchronously; each handler loads the
cart, changes it and saves it in one unit of work. Saving an aggregate is
conditional on the version that was loaded, so a concurrent writer makes the
save fail with ``ExpectedVersionError`` instead of overwriting. The ledger
then re-runs the command against the fresh cart: a compare-and-swap loop with
a bounded number of attempts.
"""

import structlog
from protean.domain import Domain
from protean.exceptions import ExpectedVersionError

from ordering.cart.cart import Cart
from ordering.cart.errors import CartVersionConflict, DataIntegrityError
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, SetCartQuantity
from ordering.cart.snapshot import SnapshotLine
from ordering.catalog.port import CatalogStore

logger = structlog.get_logger(__name__)

# Raised when a conditional write lost the race.
VERSION_CONFLICTS = (ExpectedVersionError, CartVersionConflict)


class CartLedger:
    def __init__(self, domain: Domain, catalog: CatalogStore, write_retries: int = 5):
        if write_retries < 1:
            raise ValueError("write_retries must be at least 1")
        self._domain = domain
        self._catalog = catalog
        self._write_retries = write_retries

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def write_retries(self) -> int:
        return self._write_retries

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def _write(self, command):
        for attempt in range(1, self._write_retries + 1):
            try:
                with self._domain.domain_context():
                    return self._domain.process(command, asynchronous=False)
            except VERSION_CONFLICTS:
                logger.info(
                    "Cart write conflict, retrying",
                    command=command.__class__.__name__,
                    user_id=str(command.user_id),
                    attempt=attempt,
                )

        raise CartVersionConflict(command.user_id)

    def upsert_add(self, user_id, product_id, delta) -> str:
        """Add ``delta`` to the user's entry for ``product_id``, creating it if needed.

        Returns the entry id.
        """
        return self._write(AddToCart(user_id=user_id, product_id=product_id, quantity=delta))

    def set_quantity(self, user_id, entry_id, quantity) -> None:
        self._write(SetCartQuantity(user_id=user_id, entry_id=entry_id, quantity=quantity))

    def remove(self, user_id, entry_id) -> bool:
        """Remove an entry. Removing an unknown entry is a no-op."""
        return bool(self._write(RemoveFromCart(user_id=user_id, entry_id=entry_id)))

    def clear_for(self, user_id) -> int:
        return self._write(ClearCart(user_id=user_id)) or 0

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def read(self, user_id) -> tuple[int, list[SnapshotLine]]:
        """The cart version together with its resolved entries.

        Raises ``DataIntegrityError`` if an entry's product is gone from the
        catalog; such entries are never silently dropped.
        """
        with self._domain.domain_context():
            cart = self._domain.repository_for(Cart).for_user(user_id)
            version = cart._version
            entries = [(str(e.id), str(e.product_id), e.quantity) for e in cart.ordered_entries]

        lines = []
        for entry_id, product_id, quantity in entries:
            product = self._catalog.get(product_id)
            if product is None:
                logger.error(
                    "Cart entry refers to missing product",
                    user_id=str(user_id),
                    entry_id=entry_id,
                    product_id=product_id,
                )
                raise DataIntegrityError(user_id, entry_id, product_id)
            lines.append(SnapshotLine(entry_id=entry_id, product=product, quantity=quantity))

        return version, lines

    def list_for(self, user_id) -> list[SnapshotLine]:
        return self.read(user_id)[1]
