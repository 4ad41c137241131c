"""Cache domain: persisted link results with age-based expiry."""

from .CacheEntry import CacheEntry
from .CacheStore import CacheStore

__all__ = ["CacheEntry", "CacheStore"]
