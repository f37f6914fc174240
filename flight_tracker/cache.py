"""
In-memory cache for upstream OpenSky data.

Holds the two process-wide cells the proxy needs:
- the OAuth2 bearer token (refreshed before it actually expires)
- the last transformed flight list (short TTL, minutes)

Entries carry an absolute expiry in epoch milliseconds. A read at or past
expiry evicts the entry and reports a miss, which is what triggers the
upstream refetch. The clock is injectable so tests can move time.

The lock only guards the dictionary. Refreshes are not serialised:
concurrent misses may each fetch upstream, and the last writer wins.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = 'opensky:token'
FLIGHTS_KEY = 'opensky:flights'


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class CacheEntry:
    """Cached value with its absolute expiry (epoch ms)."""
    value: Any
    expires_at: int

    def is_expired(self, now: int) -> bool:
        return now >= self.expires_at


class ExpiringCache:
    """
    Key to CacheEntry map with per-entry expiry.

    One instance lives for the process lifetime and is injected into
    the OpenSky client.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0

    def now(self) -> int:
        return self._clock()

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Returns None if not cached or expired; expired entries are evicted.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if not entry.is_expired(self._clock()):
                    self._hits += 1
                    return entry.value
                del self._entries[key]
                logger.debug(f'Cache entry {key} expired')
            self._misses += 1
        return None

    def set(self, key: str, value: Any, ttl_ms: int) -> CacheEntry:
        """Store a value that expires ttl_ms from now."""
        entry = CacheEntry(value=value, expires_at=self._clock() + ttl_ms)
        with self._lock:
            self._entries[key] = entry
        return entry

    def set_until(self, key: str, value: Any, expires_at: int) -> CacheEntry:
        """Store a value with an absolute expiry."""
        entry = CacheEntry(value=value, expires_at=expires_at)
        with self._lock:
            self._entries[key] = entry
        return entry

    def peek(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry without expiry checks or stats."""
        with self._lock:
            return self._entries.get(key)

    def has(self, key: str) -> bool:
        """Whether a live (unexpired) entry exists, without touching stats."""
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def invalidate(self, key: str) -> None:
        """Remove specific entry from cache."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._entries.clear()

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                'entries': len(self._entries),
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / total if total > 0 else 0,
            }
