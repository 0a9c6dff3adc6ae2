"""Immutable domain models for the portal cache layer.

All models are frozen dataclasses with slots. They describe cache
configuration, entries, events and the administrative view of a cache,
and have no external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Callable, Optional


class EventType(Enum):
    """Kind of change reported to cache entry listeners."""

    CREATED = auto()
    UPDATED = auto()
    REMOVED = auto()
    EXPIRED = auto()


@dataclass(frozen=True, slots=True)
class ExpiryPolicy:
    """Time-to-live applied to entries after creation.

    Attributes:
        ttl_seconds: Lifetime of an entry, None for eternal entries
    """

    ttl_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if self.ttl_seconds is not None and self.ttl_seconds <= 0:
            raise ValueError(f"TTL must be positive: {self.ttl_seconds}")

    @property
    def is_eternal(self) -> bool:
        """Check if entries never expire."""
        return self.ttl_seconds is None


@dataclass(frozen=True, slots=True)
class CacheConfiguration:
    """Configuration handed to the provider when a cache is created.

    The cache layer only threads this object through; the provider
    interprets it.

    Attributes:
        key_type: Runtime type enforced on keys (None = any)
        value_type: Runtime type enforced on values (None = any)
        expiry: Expiry policy of the entries
        max_size: Maximum number of entries (None = provider default)
        statistics_enabled: Whether the provider counts hits and misses
        read_through: Whether a get miss goes through the loader
        loader: Callable computing a value from a key
    """

    key_type: Optional[type] = None
    value_type: Optional[type] = None
    expiry: ExpiryPolicy = field(default_factory=ExpiryPolicy)
    max_size: Optional[int] = None
    statistics_enabled: bool = False
    read_through: bool = False
    loader: Optional[Callable[[Any], Any]] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.max_size is not None and self.max_size <= 0:
            raise ValueError(f"max_size must be positive: {self.max_size}")

    def with_types(self, key_type: type, value_type: type) -> CacheConfiguration:
        """Return a copy restricted to the given key and value types."""
        return replace(self, key_type=key_type, value_type=value_type)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A key/value pair read from a cache."""

    key: Any
    value: Any


@dataclass(frozen=True, slots=True)
class CacheEvent:
    """A change notified to cache entry listeners.

    Attributes:
        cache_name: Name of the cache that changed
        event_type: What happened to the entry
        key: Key of the entry
        value: New value (or the removed value for REMOVED/EXPIRED)
        old_value: Previous value for UPDATED events
    """

    cache_name: str
    event_type: EventType
    key: Any
    value: Any = None
    old_value: Any = None


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Administrative view of a registered cache.

    Attributes:
        name: Cache service name
        enabled: Current enable flag
        size: Number of live entries
        infos: Description of the cache configuration
    """

    name: str
    enabled: bool
    size: int
    infos: str


class _NotSet:
    """Marker for optional arguments where None is meaningful."""

    _instance: Optional[_NotSet] = None

    def __new__(cls) -> _NotSet:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


NOT_SET: Any = _NotSet()
