"""Cacheable service - Enable-gated front of a provider cache.

Each portal service that caches data extends AbstractCacheableService.
The service forwards the key/value surface to a cache handle created by
the provider's cache manager, and registers itself with the
CacheRegistry so administrators can list, toggle and reset it.

While the handle is absent (never enabled) or closed (disabled), reads
return None or empty results and writes are ignored. Provider errors
raised on an open handle propagate to the caller; only reset_cache
logs and swallows them.
"""

from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    TypeVar,
)

from ..domain.errors import CacheProviderError
from ..domain.models import NOT_SET, CacheConfiguration, CacheEntry
from ..ports.cache import CacheEntryListener, CachePort, CompletionListener, EntryProcessor
from ..ports.cache_manager import CacheManagerPort
from . import cache_config

if TYPE_CHECKING:
    from .cache_registry import CacheRegistry

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")


@dataclass(eq=False)
class AbstractCacheableService(ABC, Generic[K, V]):
    """Base class of every cache-backed portal service.

    Subclasses provide ``name`` and call ``init_cache()`` while they
    initialize. The provider cache is created only when the persisted
    status or the current flag says the cache is enabled.

    Attributes:
        cache_manager: Provider cache manager creating the handle
        registry: Registry the service registers itself with
        configuration: Provider configuration reused on re-enable
        enabled: Current enable flag
    """

    cache_manager: CacheManagerPort
    registry: CacheRegistry
    configuration: Optional[CacheConfiguration] = None
    enabled: bool = False

    _cache: Optional[CachePort[K, V]] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the cache, also its key in the registry."""

    # -- initialization -------------------------------------------------

    def init_cache(
        self,
        cache_name: Optional[str] = None,
        configuration: Optional[CacheConfiguration] = None,
        *,
        key_type: Optional[type] = None,
        value_type: Optional[type] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            cache_name: Cache name (defaults to the service name).
            configuration: Provider configuration (defaults to the stored one).
            key_type: Runtime type enforced on keys.
            value_type: Runtime type enforced on values.
        """
        if key_type is not None or value_type is not None:
            base = configuration or self.configuration or CacheConfiguration()
            configuration = base.with_types(key_type or object, value_type or object)
        self.create_cache(cache_name or self.name, configuration)

    def create_cache(
        self, cache_name: str, configuration: Optional[CacheConfiguration] = None
    ) -> Optional[CachePort[K, V]]:
        """Create the provider cache if the cache is enabled.

        The configuration is remembered for later re-enables. The
        service registers itself whether or not a handle was created.

        Args:
            cache_name: Cache name.
            configuration: Provider configuration.

        Returns:
            The cache handle, or None while the cache is disabled.
        """
        self.configuration = configuration or self.configuration or CacheConfiguration()

        if self._cache is None or self._cache.is_closed():
            if self.registry.stored_status(cache_name) or self.enabled:
                self._cache = self.cache_manager.create_cache(
                    cache_name, self.configuration
                )
                self.enabled = True
                self._logger.debug("Cache handle created", extra={"cache": cache_name})

        self.registry.register(self)
        return self._cache

    def _live(self) -> Optional[CachePort[K, V]]:
        if self._cache is None or self._cache.is_closed():
            return None
        return self._cache

    # -- administration -------------------------------------------------

    def is_cache_enabled(self) -> bool:
        return self.enabled

    def enable_cache(self, enable: bool) -> None:
        """Enable or disable the cache.

        The flag is persisted first. Disabling clears and closes the
        handle; enabling recreates it from the stored configuration.
        """
        self.enabled = enable
        self.registry.update_status(self)

        cache = self._live()
        if not enable and cache is not None:
            cache.clear()
            cache.close()

        if enable and cache is None:
            self.init_cache()

        self._logger.info(
            "Cache status changed", extra={"cache": self.name, "enabled": enable}
        )

    def reset_cache(self) -> None:
        """Remove every entry. Provider failures are logged, not raised."""
        try:
            cache = self._live()
            if cache is not None:
                cache.remove_all()
        except CacheProviderError as e:
            self._logger.error(
                "Cache reset failed",
                extra={"cache": self.name, "error": str(e)},
                exc_info=True,
            )

    def get_cache_size(self) -> int:
        """Count the live entries by a full scan; 0 when disabled."""
        cache = self._live()
        if cache is None:
            return 0
        return sum(1 for entry in cache if entry is not None)

    def get_keys(self) -> List[K]:
        cache = self._live()
        if cache is None:
            return []
        return [entry.key for entry in cache if entry is not None]

    def get_infos(self) -> str:
        cache = self._live()
        if cache is not None:
            return cache_config.get_infos(cache.configuration)
        return cache_config.get_infos(self.configuration)

    def get_statistics(self) -> Dict[str, Any]:
        cache = self._live()
        if cache is None:
            return {}
        return cache.stats()

    # -- key/value surface ----------------------------------------------

    def get(self, key: K) -> Optional[V]:
        cache = self._live()
        if cache is None:
            return None
        return cache.get(key)

    def get_all(self, keys: Iterable[K]) -> Dict[K, V]:
        cache = self._live()
        if cache is None:
            return {}
        return cache.get_all(keys)

    def contains_key(self, key: K) -> bool:
        cache = self._live()
        return cache is not None and cache.contains_key(key)

    def put(self, key: K, value: V) -> None:
        cache = self._live()
        if cache is not None:
            cache.put(key, value)

    def get_and_put(self, key: K, value: V) -> Optional[V]:
        cache = self._live()
        if cache is None:
            return None
        return cache.get_and_put(key, value)

    def put_all(self, entries: Mapping[K, V]) -> None:
        cache = self._live()
        if cache is not None:
            cache.put_all(entries)

    def put_if_absent(self, key: K, value: V) -> bool:
        cache = self._live()
        return cache is not None and cache.put_if_absent(key, value)

    def remove(self, key: K, old_value: Any = NOT_SET) -> bool:
        cache = self._live()
        return cache is not None and cache.remove(key, old_value)

    def get_and_remove(self, key: K) -> Optional[V]:
        cache = self._live()
        if cache is None:
            return None
        return cache.get_and_remove(key)

    def replace(self, key: K, value: V, expected: Any = NOT_SET) -> bool:
        cache = self._live()
        return cache is not None and cache.replace(key, value, expected)

    def get_and_replace(self, key: K, value: V) -> Optional[V]:
        cache = self._live()
        if cache is None:
            return None
        return cache.get_and_replace(key, value)

    def remove_all(self, keys: Optional[Iterable[K]] = None) -> None:
        cache = self._live()
        if cache is not None:
            cache.remove_all(keys)

    def clear(self) -> None:
        cache = self._live()
        if cache is not None:
            cache.clear()

    def load_all(
        self,
        keys: Iterable[K],
        replace_existing: bool = False,
        listener: Optional[CompletionListener] = None,
    ) -> None:
        cache = self._live()
        if cache is not None:
            cache.load_all(keys, replace_existing, listener)

    def invoke(self, key: K, processor: EntryProcessor, *args: Any) -> Any:
        cache = self._live()
        if cache is None:
            return None
        return cache.invoke(key, processor, *args)

    def invoke_all(
        self, keys: Iterable[K], processor: EntryProcessor, *args: Any
    ) -> Dict[K, Any]:
        cache = self._live()
        if cache is None:
            return {}
        return cache.invoke_all(keys, processor, *args)

    def register_listener(self, listener: CacheEntryListener) -> None:
        cache = self._live()
        if cache is not None:
            cache.register_listener(listener)

    def deregister_listener(self, listener: CacheEntryListener) -> None:
        cache = self._live()
        if cache is not None:
            cache.deregister_listener(listener)

    def __iter__(self) -> Iterator[CacheEntry]:
        cache = self._live()
        if cache is None:
            return iter(())
        return iter(cache)

    # -- handle ---------------------------------------------------------

    def get_configuration(self) -> Optional[CacheConfiguration]:
        return self.configuration

    def get_cache_manager(self) -> CacheManagerPort:
        return self.cache_manager

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()

    def is_closed(self) -> bool:
        return self._cache is None or self._cache.is_closed()

    def unwrap(self, cls: type[T]) -> T:
        """Return the service or its handle as ``cls``.

        Raises:
            ValueError: If neither is an instance of ``cls``.
        """
        if isinstance(self, cls):
            return self
        if isinstance(self._cache, cls):
            return self._cache
        raise ValueError(f"Cannot unwrap {self.name} to {cls.__name__}")

    def set_cache(self, cache: Optional[CachePort[K, V]]) -> None:
        self._cache = cache

    def get_cache(self) -> Optional[CachePort[K, V]]:
        return self._cache

    # -- deprecated aliases ---------------------------------------------

    def put_in_cache(self, key: K, value: V) -> None:
        """Deprecated: use put()."""
        warnings.warn(
            "put_in_cache() is deprecated, use put()", DeprecationWarning, stacklevel=2
        )
        if self.is_cache_enabled():
            self.put(key, value)

    def get_from_cache(self, key: K) -> Optional[V]:
        """Deprecated: use get()."""
        warnings.warn(
            "get_from_cache() is deprecated, use get()", DeprecationWarning, stacklevel=2
        )
        return self.get(key)

    def remove_key(self, key: K) -> None:
        """Deprecated: use remove()."""
        warnings.warn(
            "remove_key() is deprecated, use remove()", DeprecationWarning, stacklevel=2
        )
        self.get_and_remove(key)
