"""Application tests for the Checkout Processor."""

import re

import pytest
from ordering.cart.cart import Cart
from ordering.cart.errors import CartVersionConflict, DataIntegrityError
from ordering.catalog import FakeCatalog
from ordering.checkout.order_numbers import OrderNumberMinter
from ordering.checkout.processor import CheckoutProcessor
from ordering.checkout.receipt import Receipt
from protean import current_domain

USER = "user-001"


class TestCheckout:
    def test_checkout_settles_cart_into_receipt(self, cart_service, checkout_processor):
        cart_service.add_to_cart(USER, "prod-headphones", 3)

        receipt = checkout_processor.checkout(USER, {"name": "Alice", "address": "1 Main St"})

        assert receipt.total == 299.97
        assert receipt.status == "confirmed"
        assert re.fullmatch(r"ORD\d+-\d{3}", receipt.order_id)
        assert receipt.customer_info == {"name": "Alice", "address": "1 Main St"}
        [line] = receipt.ordered_lines
        assert (line.product_id, line.name, line.price, line.quantity) == (
            "prod-headphones",
            "Wireless Headphones",
            99.99,
            3,
        )

    def test_cart_is_empty_after_checkout(self, cart_service, checkout_processor):
        cart_service.add_to_cart(USER, "prod-headphones", 1)
        cart_service.add_to_cart(USER, "prod-cable", 2)

        checkout_processor.checkout(USER)

        assert cart_service.view_cart(USER).is_empty

    def test_receipt_is_persisted(self, cart_service, checkout_processor):
        cart_service.add_to_cart(USER, "prod-watch", 1)

        receipt = checkout_processor.checkout(USER)

        stored = current_domain.repository_for(Receipt).get(receipt.id)
        assert stored.order_id == receipt.order_id
        assert stored.user_id == USER
        assert stored.total == 199.99

    def test_receipt_total_matches_snapshot(self, cart_service, checkout_processor):
        cart_service.add_to_cart(USER, "prod-watch", 2)
        snapshot = cart_service.add_to_cart(USER, "prod-cable", 3)

        receipt = checkout_processor.checkout(USER)

        assert receipt.total == snapshot.total
        assert [line.product_id for line in receipt.ordered_lines] == ["prod-watch", "prod-cable"]

    def test_empty_cart_checkout_issues_zero_receipt(self, checkout_processor):
        receipt = checkout_processor.checkout(USER)
        assert receipt.total == 0.0
        assert len(receipt.lines) == 0

    def test_order_ids_are_unique(self, cart_service, checkout_processor):
        order_ids = set()
        for _ in range(5):
            cart_service.add_to_cart(USER, "prod-cable", 1)
            order_ids.add(checkout_processor.checkout(USER).order_id)
        assert len(order_ids) == 5

    def test_other_users_cart_is_untouched(self, cart_service, checkout_processor):
        cart_service.add_to_cart("user-a", "prod-watch", 1)
        cart_service.add_to_cart("user-b", "prod-cable", 2)

        checkout_processor.checkout("user-a")

        assert cart_service.view_cart("user-b").quantity_of("prod-cable") == 2

    def test_vanished_product_blocks_checkout(self, cart_service, checkout_processor, catalog):
        cart_service.add_to_cart(USER, "prod-watch", 1)
        catalog.discard("prod-watch")

        with pytest.raises(DataIntegrityError):
            checkout_processor.checkout(USER)

        assert len(current_domain.repository_for(Cart).get(USER).entries) == 1


class _InterferingCatalog(FakeCatalog):
    """Adds a product to the user's cart while checkout is resolving entries."""

    def __init__(self, products, interference):
        super().__init__(products)
        self.ledger = None
        self._interference = interference

    def get(self, product_id):
        if self.ledger is not None and self._interference:
            user_id, added_product = self._interference.pop(0)
            self.ledger.upsert_add(user_id, added_product, 1)
        return super().get(product_id)


class TestCheckoutRace:
    def _processor(self, catalog, interference, retries=5):
        from ordering.cart.ledger import CartLedger
        from ordering.domain import ordering

        racing = _InterferingCatalog(catalog._products.values(), interference)
        ledger = CartLedger(ordering, racing, write_retries=retries)
        ledger.upsert_add(USER, "prod-watch", 1)
        racing.ledger = ledger
        return CheckoutProcessor(ledger, OrderNumberMinter()), ledger

    def test_concurrent_add_is_included_after_retry(self, catalog):
        processor, ledger = self._processor(catalog, [(USER, "prod-cable")])

        receipt = processor.checkout(USER)

        assert sorted(line.product_id for line in receipt.lines) == ["prod-cable", "prod-watch"]
        assert ledger.list_for(USER) == []

    def test_retries_exhausted_leaves_cart_intact(self, catalog):
        processor, ledger = self._processor(catalog, [(USER, "prod-cable")] * 3, retries=2)

        with pytest.raises(CartVersionConflict):
            processor.checkout(USER)

        assert len(ledger.list_for(USER)) == 2
        assert current_domain.repository_for(Receipt)._dao.query.all().total == 0
