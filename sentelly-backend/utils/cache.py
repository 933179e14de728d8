"""
In-Memory TTL Cache

Short-lived, process-local cache for expensive vendor responses
(pronunciation audio). Constructed once per process and handed to the
services that use it; there is no module-level cache state.

Usage:
    from utils.cache import TTLCache

    cache = TTLCache(ttl_seconds=300, max_entries=100)
    cache.set("serendipity", audio_bytes)
    audio = cache.get("serendipity")
"""

import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

from utils.logging import get_logger

logger = get_logger(__name__)


class TTLCache:
    """
    Time-bounded key/value cache with an insertion-order size bound.

    Expired entries are dropped lazily when touched. When the cache is full,
    the oldest insertion is evicted to make room.

    Attributes:
        ttl_seconds: Lifetime of each entry
        max_entries: Maximum number of live entries (None = unbounded)
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None

        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous entry for the key."""
        if key in self._entries:
            del self._entries[key]
        elif self.max_entries is not None and len(self._entries) >= self.max_entries:
            self._purge_expired()
            while len(self._entries) >= self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache full, evicted: {evicted}")

        self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
