"""Tests for the dependency injection container wiring."""

from __future__ import annotations

import pytest

from portal_cache.adapters.cache import CachetoolsCacheManager
from portal_cache.adapters.status_store import InMemoryStatusStore, JsonFileStatusStore
from portal_cache.config import AppConfig, CacheConfig
from portal_cache.container import Container, get_container, reset_container
from portal_cache.ports.cache_manager import CacheManagerPort
from portal_cache.ports.status_store import CacheStatusStorePort
from portal_cache.services import CacheRegistry, PageCacheService


@pytest.fixture
def container():
    container = Container.create_default(AppConfig())
    yield container
    container.resolve(CacheManagerPort).close()


def test_default_bindings(container):
    assert isinstance(container.resolve(CacheManagerPort), CachetoolsCacheManager)
    assert isinstance(container.resolve(CacheStatusStorePort), InMemoryStatusStore)
    assert container.resolve(CacheRegistry) is container.resolve(CacheRegistry)


def test_page_cache_registered_on_resolve(container):
    pages = container.resolve(PageCacheService)
    registry = container.resolve(CacheRegistry)

    assert registry.get("PageCacheService") is pages
    assert pages.is_cache_enabled()


def test_status_file_selects_json_store(tmp_path):
    config = AppConfig(cache=CacheConfig(status_file=tmp_path / "status.json"))
    container = Container.create_default(config)
    assert isinstance(container.resolve(CacheStatusStorePort), JsonFileStatusStore)


def test_persisted_disable_survives_restart(tmp_path):
    config = AppConfig(cache=CacheConfig(status_file=tmp_path / "status.json"))

    first = Container.create_default(config)
    first.resolve(PageCacheService).enable_cache(False)
    first.resolve(CacheManagerPort).close()

    second = Container.create_default(config)
    pages = second.resolve(PageCacheService)
    assert not pages.is_cache_enabled()
    assert pages.get_cache() is None


def test_resolve_unknown_type_raises():
    with pytest.raises(KeyError):
        Container(config=AppConfig()).resolve(dict)


def test_register_override():
    container = Container(config=AppConfig())
    store = InMemoryStatusStore()
    container.register(CacheStatusStorePort, lambda: store)
    assert container.resolve(CacheStatusStorePort) is store
    assert container.is_registered(CacheStatusStorePort)

    container.clear_all()
    assert not container.is_registered(CacheStatusStorePort)


def test_non_singleton_factories():
    container = Container(config=AppConfig())
    container.register(CacheStatusStorePort, InMemoryStatusStore, singleton=False)
    assert container.resolve(CacheStatusStorePort) is not container.resolve(
        CacheStatusStorePort
    )


def test_global_container_lifecycle():
    reset_container()
    first = get_container()
    assert get_container() is first
    manager = first.resolve(CacheManagerPort)

    reset_container()

    assert manager.is_closed()
    assert get_container() is not first
    reset_container()
