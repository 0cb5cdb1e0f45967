"""Process-local TTL cache."""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, Optional

from .base import CacheProvider

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    expires_at: Optional[float]

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryCache(CacheProvider):
    """Dict-backed cache; timeframe fetches run on worker threads, so all access is locked.

    ``clock`` returns seconds and is injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expired(self._clock()):
                del self._entries[key]
                entry = None

            if entry is None:
                self.misses += 1
                return None
            self.hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[timedelta] = None) -> None:
        expires_at = self._clock() + ttl.total_seconds() if ttl else None
        with self._lock:
            self._entries[key] = _Entry(value, expires_at)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            logger.debug("[CACHE] Dropping %d entries", len(self._entries))
            self._entries.clear()

    def size(self) -> int:
        """Stored entries; an expired one is counted until it is next read."""
        with self._lock:
            return len(self._entries)
