"""Per-entity lock registry used to serialize writes to one order or rider."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock, RLock
from weakref import WeakValueDictionary

from fooddelivery.core.errors import ConcurrentConflict

logger = logging.getLogger(__name__)


class KeyedLocks:
    """Hands out one re-entrant lock per entity id.

    Locks are held weakly, so ids that nobody is waiting on do not accumulate.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._guard = Lock()
        self._locks: WeakValueDictionary[int, RLock] = WeakValueDictionary()

    def get(self, key: int) -> RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: int, timeout: float) -> Iterator[None]:
        """Hold the lock for ``key``; raise ConcurrentConflict after ``timeout`` seconds."""
        lock = self.get(key)
        if not lock.acquire(timeout=timeout):
            logger.warning("[LOCK] Timed out waiting for %s %s after %.1fs", self.name, key, timeout)
            raise ConcurrentConflict(f"{self.name.capitalize()} {key} is busy; retry the operation.")
        try:
            yield
        finally:
            lock.release()


order_locks = KeyedLocks("order")
rider_locks = KeyedLocks("rider")
