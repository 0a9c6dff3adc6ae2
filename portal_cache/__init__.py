"""Caching layer of the content-management portal.

Portal services keep expensive results (rendered pages, portlets,
menus) in named caches. Each cache is fronted by a cacheable service
that gates a provider cache behind an enable flag and registers itself
with a registry used by the administration pages.
"""

from .domain import CacheConfiguration, ExpiryPolicy
from .services import AbstractCacheableService, CacheRegistry, PageCacheService

__version__ = "1.0.0"

__all__ = [
    "AbstractCacheableService",
    "CacheConfiguration",
    "CacheRegistry",
    "ExpiryPolicy",
    "PageCacheService",
]
