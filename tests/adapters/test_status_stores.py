"""Tests for the cache status stores."""

from __future__ import annotations

import json

import pytest

from portal_cache.adapters.status_store import InMemoryStatusStore, JsonFileStatusStore
from portal_cache.domain.errors import StatusStoreError


def test_memory_store_roundtrip():
    store = InMemoryStatusStore()
    assert store.get_status("A") is None
    store.set_status("A", False)
    assert store.get_status("A") is False


def test_json_store_missing_file_reads_empty(tmp_path):
    store = JsonFileStatusStore(tmp_path / "status.json")
    assert store.get_status("A") is None


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "status.json"
    JsonFileStatusStore(path).set_status("PageCacheService", False)
    JsonFileStatusStore(path).set_status("MenuCacheService", True)

    assert json.loads(path.read_text()) == {
        "MenuCacheService": True,
        "PageCacheService": False,
    }
    assert JsonFileStatusStore(path).get_status("PageCacheService") is False


def test_json_store_invalid_content(tmp_path):
    path = tmp_path / "status.json"
    path.write_text("[1, 2]")
    with pytest.raises(StatusStoreError):
        JsonFileStatusStore(path).get_status("A")

    path.write_text("{not json")
    with pytest.raises(StatusStoreError) as exc_info:
        JsonFileStatusStore(path).get_status("A")
    assert exc_info.value.path == str(path)


def test_json_store_accepts_string_path(tmp_path):
    store = JsonFileStatusStore(str(tmp_path / "status.json"))
    store.set_status("A", True)
    assert store.get_status("A") is True


def test_json_store_rejects_non_boolean_status(tmp_path):
    path = tmp_path / "status.json"
    path.write_text('{"PageCacheService": "false"}')
    with pytest.raises(StatusStoreError) as exc_info:
        JsonFileStatusStore(path).get_status("PageCacheService")
    assert exc_info.value.path == str(path)


def test_json_store_write_failure_leaves_no_temp_file(tmp_path, monkeypatch):
    path = tmp_path / "status.json"
    JsonFileStatusStore(path).set_status("A", False)

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(
        "portal_cache.adapters.status_store.json_file_store.os.replace",
        failing_replace,
    )

    with pytest.raises(StatusStoreError) as exc_info:
        JsonFileStatusStore(path).set_status("A", True)

    assert exc_info.value.path == str(path)
    assert isinstance(exc_info.value.cause, OSError)
    assert json.loads(path.read_text()) == {"A": False}
    assert list(tmp_path.glob(".status.json.*")) == []
