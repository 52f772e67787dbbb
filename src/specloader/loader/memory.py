"""In-process, identity-preserving document cache with single-flight loading.

A :class:`DocumentCache` belongs to one :class:`~specloader.loader.DocumentLoader`
(it is passed to the constructor, never shared implicitly), so tests get a
fresh cache per loader.

:meth:`DocumentCache.get_or_load` guarantees at most one in-flight factory
call per key: concurrent callers asking for the same missing key wait on a
per-key lock and then observe the instance the first caller stored. Callers
for different keys hold different locks and never wait on each other. A
factory that raises stores nothing, so the next caller retries.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from specloader.document import OpenAPI

logger = logging.getLogger(__name__)


class DocumentCache:
    """Thread-safe key -> :class:`~specloader.document.OpenAPI` map."""

    def __init__(self) -> None:
        self._entries: dict[str, OpenAPI] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._waiters: dict[str, int] = {}
        self._guard = threading.Lock()

    def get(self, key: str) -> Optional[OpenAPI]:
        """Return the cached instance for *key*, or ``None``."""
        with self._guard:
            return self._entries.get(key)

    def _acquire_slot(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            self._waiters[key] = self._waiters.get(key, 0) + 1
            return lock

    def _release_slot(self, key: str) -> None:
        with self._guard:
            remaining = self._waiters[key] - 1
            if remaining:
                self._waiters[key] = remaining
            else:
                # Last caller out, whether the load succeeded or failed.
                del self._waiters[key]
                del self._key_locks[key]

    def get_or_load(self, key: str, factory: Callable[[], OpenAPI]) -> OpenAPI:
        """Return the cached instance for *key*, calling *factory* once on a miss.

        Exceptions raised by *factory* propagate to the caller that ran it;
        waiting callers then run the factory themselves.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        lock = self._acquire_slot(key)
        try:
            with lock:
                cached = self.get(key)
                if cached is not None:
                    return cached
                logger.debug("Cache miss for %s", key)
                document = factory()
                with self._guard:
                    self._entries[key] = document
                return document
        finally:
            self._release_slot(key)

    def invalidate(self, key: str) -> bool:
        """Drop *key*. Returns ``True`` if an entry was removed."""
        with self._guard:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()

    def keys(self) -> list[str]:
        with self._guard:
            return list(self._entries)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._guard:
            return key in self._entries
