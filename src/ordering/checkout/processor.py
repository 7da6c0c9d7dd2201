"""Checkout Processor: settles a user's cart into a receipt.

    Active --checkout--> Settled

1. Read the cart and resolve its entries (same integrity rules as viewing).
2. Total the lines exactly as a cart snapshot would.
3. Mint an order number.
4. Settle: persist the receipt and clear the cart, conditional on the cart
   still being at the version read in step 1.
5. Return the receipt once that unit of work has committed.

If another request changed the cart between 1 and 4, the settlement is
rejected and the whole sequence runs again, so an item added concurrently is
either on the receipt or still in the cart afterwards, never lost.
"""

import json
from datetime import UTC, datetime

import structlog

from ordering.cart.errors import CartVersionConflict
from ordering.cart.ledger import VERSION_CONFLICTS, CartLedger
from ordering.cart.snapshot import CartSnapshot
from ordering.checkout.order_numbers import OrderNumberMinter
from ordering.checkout.receipt import Receipt
from ordering.checkout.settlement import SettleCart

logger = structlog.get_logger(__name__)


class CheckoutProcessor:
    def __init__(self, ledger: CartLedger, order_numbers: OrderNumberMinter):
        self._ledger = ledger
        self._order_numbers = order_numbers

    def checkout(self, user_id, customer_info=None) -> Receipt:
        domain = self._ledger.domain

        for attempt in range(1, self._ledger.write_retries + 1):
            version, lines = self._ledger.read(user_id)
            snapshot = CartSnapshot.from_lines(lines)
            if snapshot.is_empty:
                logger.info("Checking out an empty cart", user_id=str(user_id))
            order_id = self._order_numbers.mint()

            command = SettleCart(
                user_id=user_id,
                expected_version=version,
                order_id=order_id,
                customer=json.dumps(customer_info) if customer_info is not None else None,
                lines=json.dumps(
                    [
                        {
                            "product_id": line.product.id,
                            "name": line.product.name,
                            "price": line.product.price,
                            "quantity": line.quantity,
                        }
                        for line in snapshot.lines
                    ]
                ),
                total=snapshot.total,
                issued_at=datetime.now(UTC),
            )

            try:
                with domain.domain_context():
                    receipt = domain.process(command, asynchronous=False)
            except VERSION_CONFLICTS:
                logger.info("Checkout raced a cart update, retrying", user_id=str(user_id), attempt=attempt)
                continue

            logger.info(
                "Checkout complete",
                user_id=str(user_id),
                order_id=order_id,
                item_count=len(snapshot.lines),
                total=snapshot.total,
            )
            return receipt

        raise CartVersionConflict(user_id)
