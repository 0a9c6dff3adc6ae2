"""Shared fixtures for the cache layer tests."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from portal_cache.adapters.cache import CachetoolsCacheManager
from portal_cache.adapters.status_store import InMemoryStatusStore
from portal_cache.config import CacheConfig, reset_config
from portal_cache.services import AbstractCacheableService, CacheRegistry


class FakeTimer:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DemoCacheService(AbstractCacheableService):
    """Minimal concrete service used across the tests."""

    @property
    def name(self) -> str:
        return "DemoCacheService"


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def status_store():
    return InMemoryStatusStore()


@pytest.fixture
def registry(status_store):
    return CacheRegistry(status_store=status_store)


@pytest.fixture
def manager(timer):
    manager = CachetoolsCacheManager(config=CacheConfig(), timer=timer)
    yield manager
    manager.close()


@pytest.fixture
def make_service(manager, registry, status_store):
    """Build a DemoCacheService, optionally persisted as disabled first."""

    def _make(enabled: bool = True, **kwargs) -> DemoCacheService:
        status_store.set_status("DemoCacheService", enabled)
        service = DemoCacheService(cache_manager=manager, registry=registry, **kwargs)
        service.init_cache()
        return service

    return _make
