"""Tests for the CacheRegistry administration surface."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from portal_cache.adapters.status_store import InMemoryStatusStore
from portal_cache.domain.errors import CacheNotFoundError
from portal_cache.domain.models import CacheInfo
from portal_cache.services import CacheRegistry


def _fake_service(name: str, enabled: bool = True) -> MagicMock:
    service = MagicMock()
    service.name = name
    service.is_cache_enabled.return_value = enabled
    service.get_cache_size.return_value = 0
    service.get_infos.return_value = "No configuration available"
    return service


def test_register_is_idempotent(registry):
    service = _fake_service("A")
    registry.register(service)
    registry.register(service)

    assert len(registry) == 1
    assert registry.services() == [service]


def test_register_same_name_replaces(registry, caplog):
    first = _fake_service("A")
    second = _fake_service("A")
    registry.register(first)
    registry.register(second)

    assert registry.get("A") is second
    assert "replaced" in caplog.text


def test_enumeration_keeps_registration_order(registry):
    for name in ("Pages", "Portlets", "Menus"):
        registry.register(_fake_service(name))

    assert registry.names() == ["Pages", "Portlets", "Menus"]
    assert "Portlets" in registry
    assert "Unknown" not in registry


def test_get_unknown_name_raises(registry):
    with pytest.raises(CacheNotFoundError) as exc_info:
        registry.get("missing")
    assert exc_info.value.cache_name == "missing"


def test_update_status_persists_flag(registry, status_store):
    registry.update_status(_fake_service("A", enabled=False))
    assert status_store.get_status("A") is False


def test_stored_status_default():
    assert CacheRegistry(InMemoryStatusStore()).stored_status("A") is True
    assert CacheRegistry(InMemoryStatusStore(), default_enabled=False).stored_status("A") is False


def test_stored_status_prefers_persisted_flag(registry, status_store):
    status_store.set_status("A", False)
    assert registry.stored_status("A") is False


def test_enable_and_reset_delegate(registry):
    service = _fake_service("A")
    registry.register(service)

    registry.enable("A", False)
    registry.reset("A")

    service.enable_cache.assert_called_once_with(False)
    service.reset_cache.assert_called_once_with()


def test_reset_all(registry):
    services = [_fake_service(name) for name in ("A", "B")]
    for service in services:
        registry.register(service)

    registry.reset_all()

    for service in services:
        service.reset_cache.assert_called_once_with()


def test_infos_with_real_services(make_service, registry):
    service = make_service()
    service.put_all({"a": 1, "b": 2})

    infos = registry.infos()

    assert len(infos) == 1
    info = infos[0]
    assert isinstance(info, CacheInfo)
    assert info.name == "DemoCacheService"
    assert info.enabled is True
    assert info.size == 2
    assert "Key type: any" in info.infos


def test_toggle_through_registry(make_service, registry, status_store):
    service = make_service()
    service.put("a", 1)

    registry.enable("DemoCacheService", False)
    assert service.get("a") is None
    assert status_store.get_status("DemoCacheService") is False

    registry.enable("DemoCacheService", True)
    service.put("a", 2)
    assert service.get("a") == 2
