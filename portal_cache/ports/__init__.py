"""Ports layer - Abstract interfaces (Protocols) for the cache layer.

Ports define the contracts between the cacheable services and the
cache provider, the status persistence and the administration tooling.
"""

from .cache import (
    CacheEntryListener,
    CachePort,
    CompletionListener,
    EntryProcessor,
    MutableEntryPort,
)
from .cache_manager import CacheManagerPort
from .cacheable import CacheableServicePort
from .status_store import CacheStatusStorePort

__all__ = [
    # Provider
    "CachePort",
    "CacheManagerPort",
    "CacheEntryListener",
    "CompletionListener",
    "EntryProcessor",
    "MutableEntryPort",
    # Persistence
    "CacheStatusStorePort",
    # Administration
    "CacheableServicePort",
]
