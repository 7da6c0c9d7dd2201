"""Application tests for the Cart Ledger's conditional writes."""

import threading

import pytest
from ordering.cart.cart import Cart
from ordering.cart.errors import CartVersionConflict, EntryNotFound
from ordering.cart.ledger import CartLedger
from ordering.cart.repository import CartRepository
from ordering.domain import ordering
from protean import current_domain
from protean.exceptions import ExpectedVersionError

USER = "user-001"


def _conflicting_process(failures):
    """Wrap ``ordering.process`` so the first ``failures`` calls lose a version race."""
    original = ordering.process
    calls = {"count": 0}

    def process(command, asynchronous=True):
        calls["count"] += 1
        if calls["count"] <= failures:
            raise ExpectedVersionError("Wrong expected version")
        return original(command, asynchronous=asynchronous)

    return process, calls


def _competing_add_after_load(monkeypatch, ledger, product_id, quantity):
    """Commit an add from another thread right after the next cart load.

    The interrupted writer then saves a cart that is one version behind.
    """
    original = CartRepository.for_user
    pending = [(USER, product_id, quantity)]
    errors = []

    def _add(*args):
        try:
            ledger.upsert_add(*args)
        except Exception as exc:  # surfaced through the returned list
            errors.append(exc)

    def for_user(self, user_id):
        cart = original(self, user_id)
        if pending:
            competitor = threading.Thread(target=_add, args=pending.pop())
            competitor.start()
            competitor.join()
        return cart

    monkeypatch.setattr(CartRepository, "for_user", for_user)
    return errors


class TestLedgerWrites:
    def test_upsert_add_returns_entry_id(self, ledger):
        entry_id = ledger.upsert_add(USER, "prod-watch", 2)
        cart = current_domain.repository_for(Cart).get(USER)
        assert str(cart.entries[0].id) == entry_id

    def test_upsert_add_merges(self, ledger):
        first = ledger.upsert_add(USER, "prod-watch", 1)
        second = ledger.upsert_add(USER, "prod-watch", 4)
        assert first == second
        assert ledger.list_for(USER)[0].quantity == 5

    def test_set_quantity_unknown_entry(self, ledger):
        with pytest.raises(EntryNotFound):
            ledger.set_quantity(USER, "missing-entry", 2)

    def test_remove_reports_whether_removed(self, ledger):
        entry_id = ledger.upsert_add(USER, "prod-watch", 1)
        assert ledger.remove(USER, entry_id) is True
        assert ledger.remove(USER, entry_id) is False

    def test_clear_for_returns_count(self, ledger):
        ledger.upsert_add(USER, "prod-watch", 1)
        ledger.upsert_add(USER, "prod-cable", 3)
        assert ledger.clear_for(USER) == 2
        assert ledger.list_for(USER) == []

    def test_clear_for_empty_cart(self, ledger):
        assert ledger.clear_for(USER) == 0

    def test_list_for_keeps_insertion_order(self, ledger):
        ledger.upsert_add(USER, "prod-watch", 1)
        ledger.upsert_add(USER, "prod-cable", 1)
        ledger.upsert_add(USER, "prod-watch", 1)
        assert [line.product.id for line in ledger.list_for(USER)] == ["prod-watch", "prod-cable"]

    def test_each_write_bumps_version(self, ledger):
        ledger.upsert_add(USER, "prod-watch", 1)
        version, _ = ledger.read(USER)
        ledger.upsert_add(USER, "prod-watch", 1)
        assert ledger.read(USER)[0] > version


class TestLedgerRetries:
    def test_conflict_is_retried(self, ledger, monkeypatch):
        process, calls = _conflicting_process(failures=2)
        monkeypatch.setattr(ordering, "process", process)

        ledger.upsert_add(USER, "prod-watch", 1)

        assert calls["count"] == 3
        assert ledger.list_for(USER)[0].quantity == 1

    def test_retries_are_bounded(self, catalog, monkeypatch):
        ledger = CartLedger(ordering, catalog, write_retries=3)
        process, calls = _conflicting_process(failures=10)
        monkeypatch.setattr(ordering, "process", process)

        with pytest.raises(CartVersionConflict):
            ledger.upsert_add(USER, "prod-watch", 1)

        assert calls["count"] == 3
        assert ledger.list_for(USER) == []

    def test_retry_budget_must_be_positive(self, catalog):
        with pytest.raises(ValueError):
            CartLedger(ordering, catalog, write_retries=0)


class TestConcurrentAdds:
    def test_stale_add_to_existing_cart_merges(self, ledger, monkeypatch):
        ledger.upsert_add(USER, "prod-watch", 1)
        errors = _competing_add_after_load(monkeypatch, ledger, "prod-watch", 10)

        ledger.upsert_add(USER, "prod-watch", 2)

        assert errors == []
        assert [(line.product.id, line.quantity) for line in ledger.list_for(USER)] == [("prod-watch", 13)]
        assert len(current_domain.repository_for(Cart).get(USER).entries) == 1

    def test_stale_add_to_first_cart_merges(self, ledger, monkeypatch):
        errors = _competing_add_after_load(monkeypatch, ledger, "prod-watch", 10)

        ledger.upsert_add(USER, "prod-watch", 2)

        assert errors == []
        assert [(line.product.id, line.quantity) for line in ledger.list_for(USER)] == [("prod-watch", 12)]
        assert len(current_domain.repository_for(Cart).get(USER).entries) == 1

    def test_stale_add_of_other_product_keeps_both(self, ledger, monkeypatch):
        ledger.upsert_add(USER, "prod-watch", 1)
        errors = _competing_add_after_load(monkeypatch, ledger, "prod-cable", 3)

        ledger.upsert_add(USER, "prod-watch", 1)

        assert errors == []
        assert [(line.product.id, line.quantity) for line in ledger.list_for(USER)] == [
            ("prod-watch", 2),
            ("prod-cable", 3),
        ]
