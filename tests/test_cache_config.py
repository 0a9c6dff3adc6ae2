"""Tests for configuration descriptions and the configuration models."""

from __future__ import annotations

import pytest

from portal_cache.domain.models import CacheConfiguration, ExpiryPolicy
from portal_cache.services.cache_config import NO_CONFIGURATION, get_infos


def test_infos_without_configuration():
    assert get_infos(None) == NO_CONFIGURATION


def test_infos_of_default_configuration():
    assert get_infos(CacheConfiguration()).splitlines() == [
        "Key type: any",
        "Value type: any",
        "Expiry: eternal",
        "Max size: unbounded",
        "Statistics: disabled",
        "Read-through: disabled",
    ]


def test_infos_of_full_configuration():
    configuration = CacheConfiguration(
        expiry=ExpiryPolicy(1.5),
        max_size=100,
        statistics_enabled=True,
        read_through=True,
    ).with_types(str, int)

    infos = get_infos(configuration)

    assert "Key type: builtins.str" in infos
    assert "Value type: builtins.int" in infos
    assert "Expiry: 1.5s after creation" in infos
    assert "Max size: 100" in infos
    assert "Statistics: enabled" in infos
    assert "Read-through: enabled" in infos


def test_with_types_returns_copy():
    base = CacheConfiguration(max_size=5)
    typed = base.with_types(str, bytes)
    assert base.key_type is None
    assert typed.key_type is str
    assert typed.max_size == 5


@pytest.mark.parametrize("ttl", [0, -5])
def test_expiry_rejects_non_positive_ttl(ttl):
    with pytest.raises(ValueError):
        ExpiryPolicy(ttl)


def test_max_size_must_be_positive():
    with pytest.raises(ValueError):
        CacheConfiguration(max_size=0)
