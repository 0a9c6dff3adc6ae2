"""Cache manager handing out CachetoolsCache instances by name."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

from ...config import CacheConfig, get_config
from ...domain.errors import CacheClosedError, CacheProviderError
from ...domain.models import CacheConfiguration, ExpiryPolicy
from .cachetools_cache import CachetoolsCache


@dataclass
class CachetoolsCacheManager:
    """Creates and tracks the named provider caches.

    Defaults from CacheConfig are applied to configurations that leave
    the expiry or the size bound unset. Closed caches are forgotten so
    their name can be created again.

    Attributes:
        config: Cache configuration (default TTL and size bound)
        timer: Clock handed to the TTL caches
    """

    config: CacheConfig = field(default_factory=lambda: get_config().cache)
    timer: Callable[[], float] = field(default=time.monotonic, repr=False)

    _caches: Dict[str, CachetoolsCache[Any, Any]] = field(
        default_factory=dict, repr=False
    )
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _closed: bool = field(default=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _apply_defaults(self, configuration: CacheConfiguration) -> CacheConfiguration:
        ttl = self.config.default_ttl_seconds
        if configuration.expiry.is_eternal and ttl is not None:
            return replace(configuration, expiry=ExpiryPolicy(ttl_seconds=ttl))
        return configuration

    def create_cache(
        self, name: str, configuration: Optional[CacheConfiguration] = None
    ) -> CachetoolsCache[Any, Any]:
        """Create a named cache.

        Args:
            name: Cache name.
            configuration: Provider configuration (defaults when None).

        Returns:
            The newly created cache.

        Raises:
            CacheClosedError: If the manager is closed.
            CacheProviderError: If an open cache already has this name.
        """
        with self._lock:
            if self._closed:
                raise CacheClosedError("Cache manager is closed", cache_name=name)

            existing = self._caches.get(name)
            if existing is not None and not existing.is_closed():
                raise CacheProviderError("Cache already exists", cache_name=name)

            effective = self._apply_defaults(configuration or CacheConfiguration())
            cache: CachetoolsCache[Any, Any] = CachetoolsCache(
                name=name,
                configuration=effective,
                default_max_size=self.config.default_max_size,
                on_close=self._forget,
                timer=self.timer,
            )
            self._caches[name] = cache
            self._logger.info(
                "Cache created",
                extra={
                    "cache": name,
                    "ttl": effective.expiry.ttl_seconds,
                    "max_size": effective.max_size,
                },
            )
            return cache

    def _forget(self, name: str) -> None:
        with self._lock:
            cache = self._caches.get(name)
            if cache is not None and cache.is_closed():
                del self._caches[name]

    def get_cache(self, name: str) -> Optional[CachetoolsCache[Any, Any]]:
        with self._lock:
            return self._caches.get(name)

    def destroy_cache(self, name: str) -> None:
        """Close a cache and forget it. Unknown names are ignored."""
        with self._lock:
            cache = self._caches.pop(name, None)
        if cache is not None:
            cache.close()

    def cache_names(self) -> List[str]:
        with self._lock:
            return list(self._caches)

    def close(self) -> None:
        """Close every cache and refuse further creations."""
        with self._lock:
            caches = list(self._caches.values())
            self._closed = True
        for cache in caches:
            cache.close()
        self._logger.info("Cache manager closed", extra={"caches": len(caches)})

    def is_closed(self) -> bool:
        return self._closed
