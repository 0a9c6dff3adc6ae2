"""Provider cache backed by cachetools.

Implements the CachePort key/value surface on top of a cachetools
mapping picked from the CacheConfiguration:
- TTLCache when the expiry policy has a TTL
- LRUCache when only a maximum size is set
- an unbounded Cache otherwise

The provider serializes its own operations with an RLock and raises
CacheClosedError once the cache has been closed.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    TypeVar,
)

from cachetools import Cache, LRUCache, TTLCache

from ...domain.errors import CacheClosedError, CacheProviderError
from ...domain.models import (
    NOT_SET,
    CacheConfiguration,
    CacheEntry,
    CacheEvent,
    EventType,
)
from ...ports.cache import CacheEntryListener, CompletionListener, EntryProcessor

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class MutableEntry:
    """Entry view handed to entry processors.

    Changes are recorded and applied by the cache once the processor
    returns.
    """

    key: Any
    _value: Any = NOT_SET
    _operation: Optional[str] = field(default=None, repr=False)

    def exists(self) -> bool:
        return self._value is not NOT_SET

    def get_value(self) -> Any:
        return None if self._value is NOT_SET else self._value

    def set_value(self, value: Any) -> None:
        self._value = value
        self._operation = "set"

    def remove(self) -> None:
        self._value = NOT_SET
        self._operation = "remove"


@dataclass
class CachetoolsCache(Generic[K, V]):
    """Named provider cache implementing CachePort.

    Attributes:
        name: Cache name
        configuration: Types, expiry and size of the cache
        default_max_size: Size bound used for TTL caches without max_size
        on_close: Called with the cache name once the cache is closed
        timer: Clock used for TTL expiry

    Example:
        cache = CachetoolsCache[str, str](
            name="pages",
            configuration=CacheConfiguration(expiry=ExpiryPolicy(600)),
        )
        cache.put("home", "<html>...</html>")
    """

    name: str
    configuration: CacheConfiguration = field(default_factory=CacheConfiguration)
    default_max_size: int = 10_000
    on_close: Optional[Callable[[str], None]] = field(default=None, repr=False)
    timer: Callable[[], float] = field(default=time.monotonic, repr=False)

    _store: MutableMapping[Any, Any] = field(init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _listeners: List[CacheEntryListener] = field(default_factory=list, repr=False)
    _closed: bool = field(default=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)
    _puts: int = field(default=0, repr=False)
    _removals: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._store = self._build_store()

    def _build_store(self) -> MutableMapping[Any, Any]:
        config = self.configuration
        if not config.expiry.is_eternal:
            return TTLCache(
                maxsize=config.max_size or self.default_max_size,
                ttl=config.expiry.ttl_seconds,
                timer=self.timer,
            )
        if config.max_size is not None:
            return LRUCache(maxsize=config.max_size)
        return Cache(maxsize=float("inf"))

    # -- guards ---------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise CacheClosedError("Cache is closed", cache_name=self.name)
        self._expire()

    def _expire(self) -> None:
        if not isinstance(self._store, TTLCache):
            return
        expired = self._store.expire()
        for key, value in expired or ():
            self._notify(EventType.EXPIRED, key, value)

    def _check_key(self, key: Any) -> None:
        if key is None:
            raise ValueError("Cache keys cannot be None")
        key_type = self.configuration.key_type
        if key_type is not None and not isinstance(key, key_type):
            raise TypeError(
                f"Key {key!r} is not a {key_type.__name__} (cache {self.name})"
            )

    def _check_value(self, value: Any) -> None:
        if value is None:
            raise ValueError("Cache values cannot be None")
        value_type = self.configuration.value_type
        if value_type is not None and not isinstance(value, value_type):
            raise TypeError(
                f"Value {value!r} is not a {value_type.__name__} (cache {self.name})"
            )

    # -- internal mutations (lock held) ---------------------------------

    def _notify(
        self, event_type: EventType, key: Any, value: Any = None, old_value: Any = None
    ) -> None:
        if not self._listeners:
            return
        event = CacheEvent(self.name, event_type, key, value, old_value)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                raise CacheProviderError(
                    "Cache entry listener failed", cause=e, cache_name=self.name
                ) from e

    def _record_read(self, hit: bool) -> None:
        if not self.configuration.statistics_enabled:
            return
        if hit:
            self._hits += 1
        else:
            self._misses += 1

    def _store_value(self, key: Any, value: Any) -> Any:
        old = self._store.get(key, NOT_SET)
        self._store[key] = value
        if self.configuration.statistics_enabled:
            self._puts += 1
        if old is NOT_SET:
            self._notify(EventType.CREATED, key, value)
        else:
            self._notify(EventType.UPDATED, key, value, old)
        return old

    def _delete(self, key: Any) -> Any:
        old = self._store.pop(key)
        if self.configuration.statistics_enabled:
            self._removals += 1
        self._notify(EventType.REMOVED, key, old)
        return old

    def _load(self, key: Any) -> Any:
        loader = self.configuration.loader
        if loader is None:
            raise CacheProviderError("No loader configured", cache_name=self.name)
        try:
            return loader(key)
        except Exception as e:
            raise CacheProviderError(
                f"Loader failed for key {key!r}", cause=e, cache_name=self.name
            ) from e

    # -- reads ----------------------------------------------------------

    def get(self, key: K) -> Optional[V]:
        """Get a value, loading it when read-through is configured.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if not found or expired.
        """
        self._check_key(key)
        with self._lock:
            self._ensure_open()
            value = self._store.get(key, NOT_SET)
            self._record_read(value is not NOT_SET)
            if value is not NOT_SET:
                return value

            config = self.configuration
            if config.read_through and config.loader is not None:
                loaded = self._load(key)
                if loaded is not None:
                    self._check_value(loaded)
                    self._store_value(key, loaded)
                    return loaded
            return None

    def get_all(self, keys: Iterable[K]) -> Dict[K, V]:
        result: Dict[K, V] = {}
        for key in keys:
            value = self.get(key)
            if value is not None:
                result[key] = value
        return result

    def contains_key(self, key: K) -> bool:
        self._check_key(key)
        with self._lock:
            self._ensure_open()
            return key in self._store

    # -- writes ---------------------------------------------------------

    def put(self, key: K, value: V) -> None:
        self._check_key(key)
        self._check_value(value)
        with self._lock:
            self._ensure_open()
            self._store_value(key, value)

    def get_and_put(self, key: K, value: V) -> Optional[V]:
        self._check_key(key)
        self._check_value(value)
        with self._lock:
            self._ensure_open()
            old = self._store_value(key, value)
            self._record_read(old is not NOT_SET)
            return None if old is NOT_SET else old

    def put_all(self, entries: Mapping[K, V]) -> None:
        for key, value in entries.items():
            self._check_key(key)
            self._check_value(value)
        with self._lock:
            self._ensure_open()
            for key, value in entries.items():
                self._store_value(key, value)

    def put_if_absent(self, key: K, value: V) -> bool:
        self._check_key(key)
        self._check_value(value)
        with self._lock:
            self._ensure_open()
            if key in self._store:
                return False
            self._store_value(key, value)
            return True

    def remove(self, key: K, old_value: Any = NOT_SET) -> bool:
        """Remove a key.

        Args:
            key: The cache key.
            old_value: When given, remove only if the key maps to it.

        Returns:
            True if an entry was removed.
        """
        self._check_key(key)
        with self._lock:
            self._ensure_open()
            current = self._store.get(key, NOT_SET)
            if current is NOT_SET:
                return False
            if old_value is not NOT_SET and current != old_value:
                return False
            self._delete(key)
            return True

    def get_and_remove(self, key: K) -> Optional[V]:
        self._check_key(key)
        with self._lock:
            self._ensure_open()
            if key not in self._store:
                self._record_read(False)
                return None
            self._record_read(True)
            return self._delete(key)

    def replace(self, key: K, value: V, expected: Any = NOT_SET) -> bool:
        """Replace the value of an existing key.

        Args:
            key: The cache key.
            value: The new value.
            expected: When given, replace only if the current value equals it.

        Returns:
            True if the value was replaced.
        """
        self._check_key(key)
        self._check_value(value)
        with self._lock:
            self._ensure_open()
            current = self._store.get(key, NOT_SET)
            if current is NOT_SET:
                return False
            if expected is not NOT_SET and current != expected:
                return False
            self._store_value(key, value)
            return True

    def get_and_replace(self, key: K, value: V) -> Optional[V]:
        self._check_key(key)
        self._check_value(value)
        with self._lock:
            self._ensure_open()
            if key not in self._store:
                return None
            return self._store_value(key, value)

    def remove_all(self, keys: Optional[Iterable[K]] = None) -> None:
        """Remove the given keys, or every key, notifying listeners."""
        with self._lock:
            self._ensure_open()
            targets = list(self._store.keys()) if keys is None else list(keys)
            for key in targets:
                if key in self._store:
                    self._delete(key)
            self._logger.debug(
                "Cache entries removed",
                extra={"cache": self.name, "count": len(targets)},
            )

    def clear(self) -> None:
        """Drop every entry without notifying listeners."""
        with self._lock:
            self._ensure_open()
            self._store.clear()

    # -- loading and processing -----------------------------------------

    def load_all(
        self,
        keys: Iterable[K],
        replace_existing: bool = False,
        listener: Optional[CompletionListener] = None,
    ) -> None:
        """Load the given keys through the configured loader.

        Errors are reported to the completion listener when one is given,
        raised otherwise.
        """
        try:
            with self._lock:
                self._ensure_open()
                if self.configuration.loader is not None:
                    for key in keys:
                        self._check_key(key)
                        if not replace_existing and key in self._store:
                            continue
                        value = self._load(key)
                        if value is not None:
                            self._check_value(value)
                            self._store_value(key, value)
        except Exception as e:
            if listener is None:
                raise
            listener.on_exception(e)
            return
        if listener is not None:
            listener.on_completion()

    def invoke(self, key: K, processor: EntryProcessor, *args: Any) -> Any:
        """Run an entry processor atomically against one entry.

        Args:
            key: The cache key.
            processor: Callable receiving a MutableEntry and ``args``.

        Returns:
            Whatever the processor returned.
        """
        self._check_key(key)
        with self._lock:
            self._ensure_open()
            entry = MutableEntry(key, self._store.get(key, NOT_SET))
            try:
                result = processor(entry, *args)
            except Exception as e:
                raise CacheProviderError(
                    f"Entry processor failed for key {key!r}",
                    cause=e,
                    cache_name=self.name,
                ) from e

            if entry._operation == "set":
                self._check_value(entry._value)
                self._store_value(key, entry._value)
            elif entry._operation == "remove" and key in self._store:
                self._delete(key)
            return result

    def invoke_all(
        self, keys: Iterable[K], processor: EntryProcessor, *args: Any
    ) -> Dict[K, Any]:
        results: Dict[K, Any] = {}
        with self._lock:
            for key in keys:
                result = self.invoke(key, processor, *args)
                if result is not None:
                    results[key] = result
        return results

    # -- listeners ------------------------------------------------------

    def register_listener(self, listener: CacheEntryListener) -> None:
        with self._lock:
            self._ensure_open()
            if listener in self._listeners:
                raise ValueError("Listener already registered")
            self._listeners.append(listener)

    def deregister_listener(self, listener: CacheEntryListener) -> None:
        with self._lock:
            self._ensure_open()
            if listener in self._listeners:
                self._listeners.remove(listener)

    # -- lifecycle ------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics.

        Returns:
            Dictionary with size, hit/miss counts, puts and removals.
        """
        with self._lock:
            self._ensure_open()
            reads = self._hits + self._misses
            hit_rate = (self._hits / reads * 100) if reads > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "puts": self._puts,
                "removals": self._removals,
                "hit_rate_percent": round(hit_rate, 1),
            }

    def close(self) -> None:
        """Close the cache and drop its entries. Closing twice is a no-op."""
        with self._lock:
            if self._closed:
                return
            count = len(self._store)
            self._store.clear()
            self._listeners.clear()
            self._closed = True
        self._logger.info(
            "Cache closed", extra={"cache": self.name, "entries_cleared": count}
        )
        if self.on_close is not None:
            self.on_close(self.name)

    def is_closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[CacheEntry]:
        with self._lock:
            self._ensure_open()
            snapshot = [CacheEntry(key, value) for key, value in self._store.items()]
        return iter(snapshot)
