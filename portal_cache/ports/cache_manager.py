"""Cache manager port - Creates and owns the named provider caches."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import CacheConfiguration
    from .cache import CachePort


class CacheManagerPort(Protocol):
    """Port for the provider's cache manager.

    Implementation: adapters/cache/cachetools_manager.py
    """

    def create_cache(
        self, name: str, configuration: CacheConfiguration
    ) -> CachePort[Any, Any]:
        """Create a named cache.

        Raises:
            CacheProviderError: If an open cache already has this name.
        """
        ...

    def get_cache(self, name: str) -> Optional[CachePort[Any, Any]]: ...

    def destroy_cache(self, name: str) -> None: ...

    def cache_names(self) -> Sequence[str]: ...

    def close(self) -> None: ...
