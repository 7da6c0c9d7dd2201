"""Cart entry management: commands and handler.

These are the Cart Ledger's write operations. Each runs in its own unit of
work; the cart version is checked when the unit of work commits, so two
writers that loaded the same version cannot both succeed.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class AddToCart:
    """Merge a quantity of a product into the user's cart."""

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="Cart")
class SetCartQuantity:
    user_id = Identifier(required=True)
    entry_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    entry_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartEntriesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        entry = cart.add_quantity(command.product_id, command.quantity)
        repo.add(cart)
        return str(entry.id)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.set_quantity(command.entry_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        removed = cart.remove_entry(command.entry_id)
        if removed:
            repo.add(cart)
        return removed

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if not cart.entries:
            return 0
        cleared = cart.clear()
        repo.add(cart)
        return cleared
