"""In-memory TTL cache store.

Maps resource keys to (payload, stored_at). The store knows nothing about
how payloads are fetched; freshness is decided by the caller's TTL.

THREAD-SAFETY: FastAPI runs sync handlers in a threadpool, so several
requests can read and write the same key at once. Entries are immutable and
replaced whole under a lock, which gives last-write-wins without torn reads.
Process lifetime only; nothing is persisted.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from cricai.core.types import CacheEntry

logger = logging.getLogger(__name__)

# Fixed resource keys for match lists
LIVE_KEY = "live"
RECENT_KEY = "recent"
UPCOMING_KEY = "upcoming"


def make_cache_key(resource: str, *parts: Any) -> str:
    """Build a parameterized cache key.

    Examples:
        >>> make_cache_key("scorecard", 12345)
        'scorecard:12345'
        >>> make_cache_key("live")
        'live'
    """
    if not parts:
        return resource
    return ":".join([resource, *(str(p) for p in parts)])


class CacheStore:
    """Process-wide cache of resolved payloads.

    Construct one per process and inject it into the orchestrator; tests
    build their own isolated store.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for key, or None if it was never stored."""
        with self._lock:
            return self._entries.get(key)

    @staticmethod
    def is_fresh(entry: CacheEntry, ttl: float, now: float) -> bool:
        """True while the entry is younger than ttl seconds."""
        return now - entry.stored_at < ttl

    def put(self, key: str, payload: Any, now: float | None = None) -> CacheEntry:
        """Replace the entry for key."""
        stored_at = self._clock() if now is None else now
        entry = CacheEntry(key=key, payload=payload, stored_at=stored_at)
        with self._lock:
            self._entries[key] = entry
        logger.debug("[CACHE] Stored %s", key)
        return entry

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def snapshot(self, now: float | None = None) -> dict[str, float]:
        """Age in seconds of every entry, keyed by cache key."""
        now = self._clock() if now is None else now
        with self._lock:
            entries = list(self._entries.values())
        return {e.key: round(now - e.stored_at, 1) for e in entries}

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
