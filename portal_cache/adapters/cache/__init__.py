"""Cache adapters - cachetools implementation of the cache provider ports.

Available implementations:
- CachetoolsCache: Thread-safe named cache with optional TTL and size bound
- CachetoolsCacheManager: Creates and tracks CachetoolsCache instances
"""

from .cachetools_cache import CachetoolsCache, MutableEntry
from .cachetools_manager import CachetoolsCacheManager

__all__ = ["CachetoolsCache", "CachetoolsCacheManager", "MutableEntry"]
