"""Per-key critical sections for inventory records and orders.

Every check-then-mutate on an inventory record runs while holding the lock
for its (organization_id, literature_id) key. Multi-key operations take
their locks in sorted order so two callers can never wait on each other.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterable, Iterator


class KeyedLocks:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.RLock] = {}

    def _lock_for(self, key: Hashable) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    @contextmanager
    def acquire(self, keys: Iterable[Hashable]) -> Iterator[None]:
        ordered = sorted(set(keys))
        held: list[threading.RLock] = []
        try:
            for key in ordered:
                lock = self._lock_for(key)
                lock.acquire()
                held.append(lock)
            yield
        finally:
            for lock in reversed(held):
                lock.release()


_default_locks = KeyedLocks()


def default_locks() -> KeyedLocks:
    """The registry shared by every ledger in this process."""
    return _default_locks


def order_key(order_id: int) -> tuple[str, int]:
    """Lock key serializing every read-check-write on one order.

    Order keys are always taken before any inventory key and never together
    with one in a single ``acquire``.
    """
    return ("order", order_id)
