"""Tests for the per-ledger lock registry."""

import contextvars
from concurrent.futures import ThreadPoolExecutor

from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import LedgerLockRegistry, ledger_lock


class TestLedgerLockRegistry:
    def test_same_identity_gets_same_lock(self):
        registry = LedgerLockRegistry()
        assert registry.lock_for("led-1") is registry.lock_for("led-1")

    def test_identities_are_normalised_to_strings(self):
        registry = LedgerLockRegistry()
        assert registry.lock_for(42) is registry.lock_for("42")

    def test_distinct_identities_get_distinct_locks(self):
        registry = LedgerLockRegistry()
        assert registry.lock_for("led-1") is not registry.lock_for("led-2")
        assert len(registry) == 2

    def test_discard_forgets_the_lock(self):
        registry = LedgerLockRegistry()
        registry.lock_for("led-1")
        assert "led-1" in registry

        registry.discard("led-1")
        assert "led-1" not in registry
        assert len(registry) == 0

    def test_discarding_unknown_identity_is_harmless(self):
        registry = LedgerLockRegistry()
        registry.discard("missing")
        assert len(registry) == 0

    def test_locks_are_reentrant(self):
        lock = LedgerLockRegistry().lock_for("led-1")
        with lock:
            with lock:
                pass

    def test_concurrent_lookups_agree(self):
        registry = LedgerLockRegistry()
        with ThreadPoolExecutor(max_workers=8) as pool:
            locks = list(pool.map(registry.lock_for, ["led-1"] * 100))
        assert all(lock is locks[0] for lock in locks)


class TestLedgerHoldsItsOwnLock:
    def test_operations_wait_for_the_ledger_lock(self):
        ledger = StockLedger.create(product_id="prod-001")
        ledger.add_stock(10)

        with ThreadPoolExecutor(max_workers=1) as pool:
            with ledger_lock(ledger.id):
                future = pool.submit(contextvars.copy_context().run, ledger.reserve_stock, 4)
                assert not future.done()
                ledger.add_stock(1)
                assert ledger.reserved == 0
            assert future.result(timeout=5) is None
        assert ledger.reserved == 4
        assert ledger.on_hand == 11

    def test_ledgers_do_not_share_locks(self):
        first = StockLedger.create(product_id="prod-001")
        second = StockLedger.create(product_id="prod-002")
        second.add_stock(5)

        with ledger_lock(first.id):
            with ThreadPoolExecutor(max_workers=1) as pool:
                assert pool.submit(contextvars.copy_context().run, second.reserve_stock, 2).result(timeout=5) is None
        assert second.reserved == 2
