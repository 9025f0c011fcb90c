import pytest

from shopgen.domain.models.common import CacheKey
from shopgen.infrastructure.cache.caching_service import TTLCacheService

KEY = CacheKey("image_key")

def test_get_returns_stored_value(cache_service: TTLCacheService):
    cache_service.set(KEY, "value")
    assert cache_service.get(KEY) == "value"

def test_missing_key_counts_a_miss(cache_service: TTLCacheService):
    assert cache_service.get(KEY) is None
    stats = cache_service.stats()
    assert stats["misses"] == 1
    assert stats["hits"] == 0

def test_entry_lives_until_ttl(cache_service: TTLCacheService, clock):
    cache_service.set(KEY, "value")
    clock.advance(3599)
    assert cache_service.get(KEY) == "value"

def test_expired_entry_is_a_miss_and_removed(cache_service: TTLCacheService, clock):
    cache_service.set(KEY, "value")
    clock.advance(3600)
    assert cache_service.get(KEY) is None
    stats = cache_service.stats()
    assert stats["keys"] == 0
    assert stats["misses"] == 1

def test_per_entry_ttl_overrides_default(cache_service: TTLCacheService, clock):
    cache_service.set(KEY, "value", ttl=10)
    clock.advance(10)
    assert cache_service.get(KEY) is None

def test_stats_hit_rate(cache_service: TTLCacheService):
    cache_service.set(KEY, "value")
    cache_service.get(KEY)
    cache_service.get(KEY)
    cache_service.get(KEY)
    cache_service.get(CacheKey("other"))
    stats = cache_service.stats()
    assert stats == {"keys": 1, "hits": 3, "misses": 1, "hit_rate": 0.75}

def test_stats_without_lookups_has_zero_hit_rate(cache_service: TTLCacheService):
    assert cache_service.stats()["hit_rate"] == 0.0

def test_stats_prunes_expired_entries(cache_service: TTLCacheService, clock):
    cache_service.set(CacheKey("a"), 1)
    cache_service.set(CacheKey("b"), 2, ttl=7200)
    clock.advance(3600)
    assert cache_service.stats()["keys"] == 1
    assert len(cache_service) == 1

def test_clear_removes_entries_and_resets_counters(cache_service: TTLCacheService):
    cache_service.set(KEY, "value")
    cache_service.get(KEY)
    cache_service.get(CacheKey("other"))
    cache_service.clear()
    assert cache_service.get(KEY) is None
    stats = cache_service.stats()
    assert stats["keys"] == 0
    assert stats["hits"] == 0
    assert stats["misses"] == 1

def test_delete(cache_service: TTLCacheService):
    cache_service.set(KEY, "value")
    cache_service.delete(KEY)
    cache_service.delete(KEY)
    assert cache_service.get(KEY) is None
