"""Cacheable service port - What administration tooling sees of a cache."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol


class CacheableServicePort(Protocol):
    """Port implemented by every cache registered in the CacheRegistry.

    Implementation: services/cacheable_service.py (AbstractCacheableService)
    """

    @property
    def name(self) -> str: ...

    def is_cache_enabled(self) -> bool: ...

    def enable_cache(self, enable: bool) -> None: ...

    def reset_cache(self) -> None: ...

    def get_cache_size(self) -> int: ...

    def get_keys(self) -> List[Any]: ...

    def get_infos(self) -> str: ...

    def get_statistics(self) -> Dict[str, Any]: ...
