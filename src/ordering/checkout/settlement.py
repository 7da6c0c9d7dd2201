"""Cart settlement: command and handler.

Issuing the receipt and clearing the cart happen in one unit of work. Either
both are committed or neither is: a receipt is never returned for a cart that
was not cleared, and a cart is never cleared without its receipt.
"""

import json

from protean import handle
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.errors import CartVersionConflict
from ordering.checkout.receipt import Receipt
from ordering.domain import ordering


@ordering.command(part_of="Receipt")
class SettleCart:
    """Turn the cart, as read at ``expected_version``, into a receipt."""

    user_id = Identifier(required=True)
    expected_version = Integer(required=True)
    order_id = String(required=True, max_length=64)
    customer = Text()  # JSON
    lines = Text(required=True)  # JSON: list of {product_id, name, price, quantity}
    total = Float(required=True)
    issued_at = DateTime(required=True)


@ordering.command_handler(part_of=Receipt)
class SettleCartHandler:
    @handle(SettleCart)
    def settle_cart(self, command):
        carts = current_domain.repository_for(Cart)
        cart = carts.for_user(command.user_id)

        # The lines were priced from this exact version of the cart
        if cart._version != command.expected_version:
            raise CartVersionConflict(command.user_id)

        receipt = Receipt.issue(
            order_id=command.order_id,
            user_id=command.user_id,
            customer=json.loads(command.customer) if command.customer else None,
            lines=json.loads(command.lines),
            total=command.total,
            created_at=command.issued_at,
        )
        current_domain.repository_for(Receipt).add(receipt)

        cart.check_out(command.order_id)
        carts.add(cart)

        return receipt
