"""Per-ledger locks.

Every StockLedger operation runs its check and its write while holding the
lock for that ledger's identity. Command handlers take the same lock around
the whole load, change and commit, which makes commands on one ledger
linearizable. Each identity gets its own lock; ledgers never share one.
"""

import functools
from threading import Lock, RLock


class LedgerLockRegistry:
    """Hands out one re-entrant lock per ledger identity. Thread-safe."""

    def __init__(self):
        self._guard = Lock()
        self._locks: dict[str, RLock] = {}

    def lock_for(self, ledger_id) -> RLock:
        key = str(ledger_id)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = RLock()
                self._locks[key] = lock
            return lock

    def discard(self, ledger_id) -> None:
        with self._guard:
            self._locks.pop(str(ledger_id), None)

    def __contains__(self, ledger_id) -> bool:
        with self._guard:
            return str(ledger_id) in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_registry = LedgerLockRegistry()


def ledger_lock(ledger_id) -> RLock:
    """Return the lock guarding the ledger with the given identity."""
    return _registry.lock_for(ledger_id)


def discard_ledger_lock(ledger_id) -> None:
    """Forget the lock of a removed ledger."""
    _registry.discard(ledger_id)


def serialized(handler):
    """Run a command handler method while holding its ledger's lock.

    Stack it above ``@handle`` so the lock also covers the unit of work the
    handler runs in: the load, the change and the commit all happen before
    another command on the same ledger can load it. Commands must carry a
    ``ledger_id``.
    """

    @functools.wraps(handler)
    def wrapper(instance, command):
        with ledger_lock(command.ledger_id):
            return handler(instance, command)

    return wrapper
