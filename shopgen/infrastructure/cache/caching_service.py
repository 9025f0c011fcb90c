"""Concrete implementation of the in-memory Caching Service.

Stores entries in a dictionary with a per-entry expiry time. Expiry is lazy:
entries are checked when read and purged when statistics are taken.
"""

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, Optional

# Domain Layer Imports
from shopgen.domain.interfaces.cache import CacheService
from shopgen.domain.interfaces.clock import Clock
from shopgen.domain.models.common import CacheKey, CacheStats
from shopgen.infrastructure.resilience.clock import SystemClock

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60 # 1 hour

@dataclass
class CacheEntry:
    """Internal representation of a cache entry with expiry."""
    value: Any
    inserted_at: float
    expiry_time: float # Clock time when the entry expires

class TTLCacheService(CacheService):
    """Thread-safe in-memory cache with a fixed time-to-live per entry."""

    def __init__(self, default_ttl: float = DEFAULT_TTL_SECONDS, clock: Optional[Clock] = None):
        """Initializes the caching service.

        Args:
            default_ttl: Time-to-live in seconds applied when set() gets no ttl.
            clock: Clock used to stamp and expire entries (system clock if None).
        """
        self.default_ttl = default_ttl
        self.clock = clock or SystemClock()
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._lock = Lock()
        logger.info(f"CachingService initialized. ttl={default_ttl}s")

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now >= entry.expiry_time

    def _prune(self, now: float) -> None:
        """Removes expired entries. Caller must hold the lock."""
        expired_keys = [k for k, v in self._entries.items() if self._is_expired(v, now)]
        for k in expired_keys:
            del self._entries[k]
        if expired_keys:
            logger.debug(f"Pruned {len(expired_keys)} expired cache entries")

    # --- CacheService Interface Implementation ---

    def get(self, key: CacheKey) -> Optional[Any]:
        """Retrieves an item if present and not expired, counting a hit or miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_expired(entry, self.clock.now()):
                del self._entries[key]
                logger.debug(f"Cache entry expired for key: {key}")
                entry = None
            if entry is None:
                self._misses += 1
                logger.debug(f"Cache miss for key: {key}")
                return None
            self._hits += 1
            logger.debug(f"Cache hit for key: {key}")
            return entry.value

    def set(self, key: CacheKey, value: Any, ttl: Optional[float] = None) -> None:
        """Stores an item with a fresh time-to-live."""
        with self._lock:
            now = self.clock.now()
            effective_ttl = self.default_ttl if ttl is None else ttl
            self._entries[key] = CacheEntry(value=value, inserted_at=now, expiry_time=now + effective_ttl)
        logger.debug(f"Stored item in cache: key={key}, ttl={effective_ttl}s")

    def delete(self, key: CacheKey) -> None:
        with self._lock:
            if self._entries.pop(key, None) is not None:
                logger.debug(f"Deleted item from cache: key={key}")

    def clear(self) -> None:
        """Removes every entry and resets the hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("Image cache cleared")

    def stats(self) -> CacheStats:
        with self._lock:
            self._prune(self.clock.now())
            lookups = self._hits + self._misses
            return CacheStats(
                keys=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                hit_rate=(self._hits / lookups) if lookups else 0.0,
            )

    def __len__(self) -> int:
        return self.stats()["keys"]
