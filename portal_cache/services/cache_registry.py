"""Cache registry - Name to cacheable service mapping.

The registry is what administration tooling talks to: it enumerates the
caches, toggles and resets them, and persists their enable flag through
a CacheStatusStorePort. It is consulted when caches are created and
toggled, never on the read/write path.

Entries are never removed. The registry does no locking of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from ..domain.errors import CacheNotFoundError
from ..domain.models import CacheInfo
from ..ports.cacheable import CacheableServicePort
from ..ports.status_store import CacheStatusStorePort


@dataclass
class CacheRegistry:
    """Registry of the cacheable services of the portal.

    Usage:
        registry = CacheRegistry(InMemoryStatusStore())
        pages = PageCacheService(cache_manager, registry)
        registry.enable("PageCacheService", False)
        for info in registry.infos():
            print(info.name, info.enabled, info.size)

    Attributes:
        status_store: Persistence for the enable flags
        default_enabled: Status of a cache with no persisted flag
    """

    status_store: CacheStatusStorePort
    default_enabled: bool = True

    _services: Dict[str, CacheableServicePort] = field(
        default_factory=dict, repr=False
    )
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def register(self, service: CacheableServicePort) -> None:
        """Register a service under its name.

        Registering the same service twice is a no-op; registering another
        service under a known name replaces the previous one.
        """
        existing = self._services.get(service.name)
        if existing is service:
            return
        if existing is not None:
            self._logger.warning(
                "Cache service replaced in registry", extra={"cache": service.name}
            )
        self._services[service.name] = service
        self._logger.debug("Cache service registered", extra={"cache": service.name})

    def update_status(self, service: CacheableServicePort) -> None:
        """Persist the current enable flag of a service."""
        self.status_store.set_status(service.name, service.is_cache_enabled())

    def stored_status(self, name: str) -> bool:
        """Return the persisted flag of a cache, or the default if unknown."""
        status = self.status_store.get_status(name)
        if status is None:
            return self.default_enabled
        return status

    def get(self, name: str) -> CacheableServicePort:
        """Look up a service by name.

        Raises:
            CacheNotFoundError: If no service has this name.
        """
        try:
            return self._services[name]
        except KeyError:
            raise CacheNotFoundError(
                f"No cache registered under {name!r}", cache_name=name
            ) from None

    def services(self) -> List[CacheableServicePort]:
        """Return the registered services in registration order."""
        return list(self._services.values())

    def names(self) -> List[str]:
        return list(self._services)

    def enable(self, name: str, enable: bool) -> None:
        self.get(name).enable_cache(enable)

    def reset(self, name: str) -> None:
        self.get(name).reset_cache()

    def reset_all(self) -> None:
        """Reset every registered cache."""
        for service in self.services():
            service.reset_cache()
        self._logger.info("All caches reset", extra={"caches": len(self._services)})

    def infos(self) -> List[CacheInfo]:
        """Return the administrative view of every registered cache."""
        return [
            CacheInfo(
                name=service.name,
                enabled=service.is_cache_enabled(),
                size=service.get_cache_size(),
                infos=service.get_infos(),
            )
            for service in self.services()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __len__(self) -> int:
        return len(self._services)
