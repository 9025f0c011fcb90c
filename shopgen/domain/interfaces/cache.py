"""Port for the result cache used by the image generation wrapper."""

import abc
from typing import Any, Optional

from ..models.common import CacheKey, CacheStats

class CacheService(abc.ABC):
    """Key/value store whose entries expire after a time-to-live."""

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[Any]:
        """Returns the live value for key, or None. Counts a hit or a miss."""
        pass

    @abc.abstractmethod
    def set(self, key: CacheKey, value: Any, ttl: Optional[float] = None) -> None:
        """Stores value for ttl seconds (the store's default when None)."""
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> None:
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Drops every entry and zeroes the hit/miss counters."""
        pass

    @abc.abstractmethod
    def stats(self) -> CacheStats:
        pass
