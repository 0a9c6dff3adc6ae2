"""Cache port - The provider-owned cache handle.

This protocol describes the key/value surface a cache provider hands
out for a named cache. The cacheable services forward to it and never
look inside the values.

Implementation: adapters/cache/cachetools_cache.py (CachetoolsCache)
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
)

if TYPE_CHECKING:
    from ..domain.models import CacheConfiguration, CacheEntry, CacheEvent

K = TypeVar("K")
V = TypeVar("V")

# Listener called synchronously for every entry change
CacheEntryListener = Callable[["CacheEvent"], None]


class MutableEntryPort(Protocol):
    """Entry handed to an entry processor by ``invoke``."""

    @property
    def key(self) -> Any: ...

    def exists(self) -> bool: ...

    def get_value(self) -> Any: ...

    def set_value(self, value: Any) -> None: ...

    def remove(self) -> None: ...


# Processor receiving the mutable entry plus the extra invoke arguments
EntryProcessor = Callable[..., Any]


class CompletionListener(Protocol):
    """Notified when an asynchronous-style ``load_all`` finishes."""

    def on_completion(self) -> None: ...

    def on_exception(self, error: Exception) -> None: ...


class CachePort(Protocol[K, V]):
    """Port for a provider cache handle.

    Every operation on a closed handle raises CacheClosedError.
    """

    @property
    def name(self) -> str: ...

    @property
    def configuration(self) -> CacheConfiguration: ...

    def get(self, key: K) -> Optional[V]:
        """Get a value, or None if the key is not cached."""
        ...

    def get_all(self, keys: Iterable[K]) -> Dict[K, V]:
        """Get the cached values for the given keys, skipping misses."""
        ...

    def contains_key(self, key: K) -> bool: ...

    def put(self, key: K, value: V) -> None: ...

    def get_and_put(self, key: K, value: V) -> Optional[V]:
        """Store a value and return the one it replaced."""
        ...

    def put_all(self, entries: Mapping[K, V]) -> None: ...

    def put_if_absent(self, key: K, value: V) -> bool:
        """Store a value only if the key is absent.

        Returns:
            True if the value was stored.
        """
        ...

    def remove(self, key: K, old_value: Any = ...) -> bool:
        """Remove a key, optionally only if it maps to ``old_value``."""
        ...

    def get_and_remove(self, key: K) -> Optional[V]: ...

    def replace(self, key: K, value: V, expected: Any = ...) -> bool:
        """Replace an existing value, optionally only if it equals ``expected``."""
        ...

    def get_and_replace(self, key: K, value: V) -> Optional[V]: ...

    def remove_all(self, keys: Optional[Iterable[K]] = None) -> None:
        """Remove the given keys, or every key, notifying listeners."""
        ...

    def clear(self) -> None:
        """Drop every entry without notifying listeners."""
        ...

    def load_all(
        self,
        keys: Iterable[K],
        replace_existing: bool = False,
        listener: Optional[CompletionListener] = None,
    ) -> None: ...

    def invoke(self, key: K, processor: EntryProcessor, *args: Any) -> Any: ...

    def invoke_all(
        self, keys: Iterable[K], processor: EntryProcessor, *args: Any
    ) -> Dict[K, Any]: ...

    def register_listener(self, listener: CacheEntryListener) -> None: ...

    def deregister_listener(self, listener: CacheEntryListener) -> None: ...

    def stats(self) -> Dict[str, Any]: ...

    def close(self) -> None: ...

    def is_closed(self) -> bool: ...

    def __iter__(self) -> Iterator[CacheEntry]: ...
