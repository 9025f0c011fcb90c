"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like prompts, cache keys
and product identifiers, ensuring consistency and type safety.
"""

from typing import NewType, TypedDict

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
PromptText = NewType("PromptText", str)        # Prompt sent to the image model
ProductId = NewType("ProductId", str)          # Catalog identifier of a product
ApiKey = NewType("ApiKey", str)                # Credential for the image API

# === Caching Context ===
CacheKey = NewType("CacheKey", str)              # Unique key for a cache entry

# === Cache Statistics ===
class CacheStats(TypedDict):
    """Snapshot of the cache counters."""
    keys: int
    hits: int
    misses: int
    hit_rate: float
