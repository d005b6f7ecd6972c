"""
Read-mostly cache slot holding the latest snapshot of a remote corpus.

Design
------
- A corpus snapshot is immutable once decoded, so readers simply borrow the
  current reference; no copying is needed.
- The slot itself is guarded by a ``threading.Lock`` that is only held for
  the reference read or the reference swap, never across an ``await``.
- ``refresh()`` runs the (slow) loader without the lock and swaps the new
  snapshot in at the end. Readers therefore see either the old or the new
  snapshot in full, never a mix, and never wait on the network.
- A failed refresh keeps the last good snapshot. The only way to reach the
  populated state is a successful load; there is no way back to empty.
"""

from __future__ import annotations

import threading
import time
from typing import Awaitable, Callable, Generic, TypeVar

from factocord.errors import CacheUnavailableError
from factocord.util.logger import get_logger

logger = get_logger("corpus_cache")

T = TypeVar("T")

LOCK_TIMEOUT_SECONDS = 5.0


class CorpusCache(Generic[T]):
    """
    Single shared slot for one decoded corpus.

    Args:
        name: Human-readable name used in log messages (e.g. "runtime API").
        loader: Coroutine function returning a freshly fetched and decoded snapshot.
    """

    def __init__(self, name: str, loader: Callable[[], Awaitable[T]]) -> None:
        self.name = name
        self._loader = loader
        self._lock = threading.Lock()
        self._snapshot: T | None = None
        self._refreshed_at: float | None = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def is_populated(self) -> bool:
        return self._snapshot is not None

    @property
    def refreshed_at(self) -> float | None:
        """Unix time of the last successful swap, or None while empty."""
        return self._refreshed_at

    def snapshot(self) -> T:
        """Return the current snapshot.

        Raises:
            CacheUnavailableError: If the cache was never populated or its
                lock could not be acquired in time.
        """
        if not self._lock.acquire(timeout=LOCK_TIMEOUT_SECONDS):
            raise CacheUnavailableError(f"Error acquiring {self.name} cache: lock timed out")
        try:
            current = self._snapshot
        finally:
            self._lock.release()

        if current is None:
            raise CacheUnavailableError(f"Error acquiring {self.name} cache: not loaded yet")
        return current

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def replace(self, new_snapshot: T) -> None:
        """Atomically swap in ``new_snapshot``."""
        if not self._lock.acquire(timeout=LOCK_TIMEOUT_SECONDS):
            raise CacheUnavailableError(f"Error acquiring {self.name} cache for update: lock timed out")
        try:
            self._snapshot = new_snapshot
            self._refreshed_at = time.time()
        finally:
            self._lock.release()

    async def prime(self) -> T:
        """Perform the first load. Any failure propagates so startup can abort."""
        logger.info("[CORPUS CACHE] Loading %s cache", self.name)
        new_snapshot = await self._loader()
        self.replace(new_snapshot)
        logger.info("[CORPUS CACHE] Loaded %s cache", self.name)
        return new_snapshot

    async def refresh(self) -> bool:
        """Reload the corpus, keeping the previous snapshot on failure.

        Returns:
            bool: True if a new snapshot was swapped in.
        """
        logger.info("[CORPUS CACHE] Updating %s cache", self.name)
        try:
            new_snapshot = await self._loader()
            self.replace(new_snapshot)
        except Exception as exc:
            logger.error("[CORPUS CACHE] Error while updating %s cache, keeping previous snapshot: %s", self.name, exc)
            return False
        logger.info("[CORPUS CACHE] Updated %s cache", self.name)
        return True
