"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It wires the cache provider, the status store, the registry and the
portal's cacheable services.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - services instantiated on first use
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        registry = container.resolve(CacheRegistry)

        # Testing
        container = Container()
        container.register(CacheStatusStorePort, lambda: InMemoryStatusStore())
        store = container.resolve(CacheStatusStorePort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Logging is configured from ``config.observability``.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import CachetoolsCacheManager
        from .adapters.status_store import InMemoryStatusStore, JsonFileStatusStore
        from .logging_config import configure_logging
        from .ports.cache_manager import CacheManagerPort
        from .ports.status_store import CacheStatusStorePort
        from .services import CacheRegistry, PageCacheService

        config = config or get_config()
        container = cls(config=config)
        configure_logging(config.observability)

        # Provider
        container.register(
            CacheManagerPort,
            lambda: CachetoolsCacheManager(config=config.cache),
        )

        # Status persistence based on config
        def create_status_store() -> CacheStatusStorePort:
            if config.cache.status_file is not None:
                return JsonFileStatusStore(config.cache.status_file)
            return InMemoryStatusStore()

        container.register(CacheStatusStorePort, create_status_store)

        container.register(
            CacheRegistry,
            lambda: CacheRegistry(
                status_store=container.resolve(CacheStatusStorePort),
                default_enabled=config.cache.default_enabled,
            ),
        )

        # Portal services
        container.register(
            PageCacheService,
            lambda: PageCacheService(
                cache_manager=container.resolve(CacheManagerPort),
                registry=container.resolve(CacheRegistry),
            ),
        )

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    The cache manager, if it was created, is closed.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            from .ports.cache_manager import CacheManagerPort

            container = _default_container
            if CacheManagerPort in container._singletons:
                container._singletons[CacheManagerPort].close()
            container.clear_all()
        _default_container = None
