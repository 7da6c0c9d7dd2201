"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartEntryAdded:
    """A product was added to the cart, or its quantity was increased."""

    __version__ = 1

    user_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartQuantityChanged:
    """The quantity of a cart entry was set explicitly."""

    __version__ = 1

    user_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartEntryRemoved:
    """An entry was removed from the cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """All entries were removed from the cart on request."""

    __version__ = 1

    user_id = Identifier(required=True)
    entries_cleared = Integer(required=True)


@ordering.event(part_of="Cart")
class CartCheckedOut:
    """The cart was settled into a receipt and emptied."""

    __version__ = 1

    user_id = Identifier(required=True)
    order_id = String(required=True, max_length=64)
    entries_settled = Integer(required=True)
