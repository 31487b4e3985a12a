"""
In-process TTL cache
Shared by all requests of one worker process for wishlist and product lookups
"""

from typing import Optional, Any, Callable, Dict, Tuple
from collections import OrderedDict
import threading
import time
import logging

from prometheus_client import Counter

logger = logging.getLogger(__name__)

cache_hits = Counter('wishlist_cache_hits_total', 'Cache hits', ['namespace'])
cache_misses = Counter('wishlist_cache_misses_total', 'Cache misses', ['namespace'])
cache_evictions = Counter('wishlist_cache_evictions_total', 'Entries evicted by the capacity bound')

def _namespace(key: str) -> str:
    return key.split(":", 1)[0]

class TTLCache:
    """
    Key/value cache with a single cache-wide time-to-live.

    Entries expire lazily: an entry older than ``ttl`` seconds is treated as a
    miss and dropped when it is read. There is no background sweep and, unless
    ``max_entries`` is given, no size bound.

    Args:
        ttl: Lifetime of an entry in seconds
        max_entries: Optional capacity; when exceeded, expired entries are
            purged first and then the oldest insertions are evicted
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl: float,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[Any, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache, None on miss or expiry"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                value, inserted_at = entry
                if self._clock() - inserted_at < self.ttl:
                    cache_hits.labels(namespace=_namespace(key)).inc()
                    return value
                del self._entries[key]
        cache_misses.labels(namespace=_namespace(key)).inc()
        return None

    async def set(self, key: str, value: Any) -> None:
        """Store value, overwriting any previous entry and its timestamp"""
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (value, self._clock())
            if self.max_entries is not None and len(self._entries) > self.max_entries:
                self._evict()

    async def delete(self, key: str) -> bool:
        """Delete key from cache"""
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self) -> None:
        """Drop every entry"""
        with self._lock:
            self._entries.clear()
        logger.info("Cache cleared")

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "ttl_seconds": self.ttl,
                "max_entries": self.max_entries,
            }

    def _evict(self) -> None:
        # Caller holds the lock
        now = self._clock()
        expired = [k for k, (_, ts) in self._entries.items() if now - ts >= self.ttl]
        for key in expired:
            del self._entries[key]
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
            cache_evictions.inc()
