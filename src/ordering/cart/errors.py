"""Cart and checkout errors.

Each is a synchronous, request-local failure. The unit of work that raised it
is rolled back, so the ledger stays at its last committed state.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class ProductNotFound(ObjectNotFoundError):
    """The product referenced at add-time is not in the catalog."""

    def __init__(self, product_id):
        super().__init__({"product_id": [f"Product {product_id} not found"]})
        self.product_id = product_id


class EntryNotFound(ObjectNotFoundError):
    """No cart entry with this id belongs to the caller."""

    def __init__(self, entry_id):
        super().__init__({"entry_id": [f"Cart item {entry_id} not found"]})
        self.entry_id = entry_id


class InvalidQuantity(ValidationError):
    """A quantity below 1 on add or update."""

    def __init__(self, quantity):
        super().__init__({"quantity": ["Quantity must be at least 1"]})
        self.quantity = quantity


class DataIntegrityError(Exception):
    """A ledger entry points at a product that has left the catalog."""

    def __init__(self, user_id, entry_id, product_id):
        super().__init__(f"Cart item {entry_id} refers to missing product {product_id}")
        self.user_id = user_id
        self.entry_id = entry_id
        self.product_id = product_id


class CartVersionConflict(Exception):
    """The cart changed underneath a conditional write, and retries ran out."""

    def __init__(self, user_id):
        super().__init__(f"Cart for user {user_id} was modified concurrently")
        self.user_id = user_id
