"""Cart aggregate: one user's partition of the Cart Ledger.

The cart's identifier *is* the user identifier, so each user has exactly one
cart and carts never need to be looked up by anything else. Entries are
keyed by product: adding a product that is already present increases the
existing entry instead of creating a second one.

Every persisted change bumps the aggregate version. Writers that read the
cart and then write it back rely on that version as a compare-and-swap
token (see ``ordering.cart.ledger``).
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.errors import EntryNotFound, InvalidQuantity
from ordering.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartEntryAdded,
    CartEntryRemoved,
    CartQuantityChanged,
)
from ordering.domain import ordering


@ordering.entity(part_of="Cart")
class CartEntry:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True)
    added_at = DateTime()


@ordering.aggregate
class Cart:
    entries = HasMany(CartEntry)
    next_position = Integer(default=1)
    updated_at = DateTime()

    @invariant.post
    def one_entry_per_product(self):
        product_ids = [str(entry.product_id) for entry in self.entries]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"entries": ["A product may appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, user_id):
        """An empty, not yet persisted cart for ``user_id``."""
        return cls(id=user_id, next_position=1, updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def user_id(self):
        return str(self.id)

    @property
    def ordered_entries(self):
        """Entries in the order they were first added."""
        return sorted(self.entries, key=lambda entry: entry.position)

    def find_entry(self, entry_id):
        return next((e for e in self.entries if str(e.id) == str(entry_id)), None)

    def find_product_entry(self, product_id):
        return next((e for e in self.entries if str(e.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Ledger operations
    # -------------------------------------------------------------------
    def add_quantity(self, product_id, delta):
        """Merge ``delta`` units of a product into the cart.

        Returns the affected entry. Raises ``InvalidQuantity`` if the entry
        would end up below 1.
        """
        existing = self.find_product_entry(product_id)
        resulting = (existing.quantity if existing else 0) + delta
        if resulting < 1:
            raise InvalidQuantity(resulting)

        now = datetime.now(UTC)

        if existing:
            existing.quantity = resulting
            entry = existing
        else:
            entry = CartEntry(
                product_id=product_id,
                quantity=resulting,
                position=self.next_position,
                added_at=now,
            )
            self.add_entries(entry)
            self.next_position = (self.next_position or 1) + 1

        self.updated_at = now

        self.raise_(
            CartEntryAdded(
                user_id=self.user_id,
                entry_id=str(entry.id),
                product_id=str(product_id),
                quantity_added=delta,
                quantity=resulting,
            )
        )
        return entry

    def set_quantity(self, entry_id, quantity):
        """Overwrite an entry's quantity. Zero is rejected, not treated as removal."""
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity)

        entry = self.find_entry(entry_id)
        if entry is None:
            raise EntryNotFound(entry_id)

        previous_quantity = entry.quantity
        entry.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityChanged(
                user_id=self.user_id,
                entry_id=str(entry_id),
                previous_quantity=previous_quantity,
                quantity=quantity,
            )
        )
        return entry

    def remove_entry(self, entry_id):
        """Remove an entry if present. Returns whether anything was removed."""
        entry = self.find_entry(entry_id)
        if entry is None:
            return False

        product_id = str(entry.product_id)
        self.remove_entries(entry)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartEntryRemoved(
                user_id=self.user_id,
                entry_id=str(entry_id),
                product_id=product_id,
            )
        )
        return True

    def _empty(self):
        entries = list(self.entries)
        for entry in entries:
            self.remove_entries(entry)
        self.updated_at = datetime.now(UTC)
        return len(entries)

    def clear(self):
        """Remove every entry. Returns how many were removed."""
        cleared = self._empty()
        self.raise_(CartCleared(user_id=self.user_id, entries_cleared=cleared))
        return cleared

    def check_out(self, order_id):
        """Empty the cart as part of settling it into order ``order_id``."""
        settled = self._empty()
        self.raise_(CartCheckedOut(user_id=self.user_id, order_id=order_id, entries_settled=settled))
        return settled
