"""Services layer - Cacheable services and their registry.

Available services:
- AbstractCacheableService: Base class of every cache-backed service
- CacheRegistry: Administration view over the cacheable services
- PageCacheService: Cache of rendered portal pages
"""

from .cache_registry import CacheRegistry
from .cacheable_service import AbstractCacheableService
from .page_cache import PageCacheService

__all__ = ["AbstractCacheableService", "CacheRegistry", "PageCacheService"]
