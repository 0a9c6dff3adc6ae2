"""Domain layer - Core cache models and errors.

This module contains immutable domain models and typed errors
used throughout the cache layer. No external dependencies.
"""

from .errors import (
    CacheClosedError,
    CacheNotFoundError,
    CacheProviderError,
    PortalCacheError,
    StatusStoreError,
)
from .models import (
    CacheConfiguration,
    CacheEntry,
    CacheEvent,
    CacheInfo,
    EventType,
    ExpiryPolicy,
    NOT_SET,
)

__all__ = [
    # Models
    "CacheConfiguration",
    "CacheEntry",
    "CacheEvent",
    "CacheInfo",
    "EventType",
    "ExpiryPolicy",
    "NOT_SET",
    # Errors
    "PortalCacheError",
    "CacheProviderError",
    "CacheClosedError",
    "CacheNotFoundError",
    "StatusStoreError",
]
