"""Human-readable description of a cache configuration."""

from __future__ import annotations

from typing import Optional

from ..domain.models import CacheConfiguration

NO_CONFIGURATION = "No configuration available"


def _type_name(value_type: Optional[type]) -> str:
    if value_type is None:
        return "any"
    return f"{value_type.__module__}.{value_type.__qualname__}"


def get_infos(configuration: Optional[CacheConfiguration]) -> str:
    """Describe a configuration for the administration pages.

    Args:
        configuration: The configuration to describe, may be None.

    Returns:
        One ``label: value`` line per setting.
    """
    if configuration is None:
        return NO_CONFIGURATION

    expiry = configuration.expiry
    lines = [
        f"Key type: {_type_name(configuration.key_type)}",
        f"Value type: {_type_name(configuration.value_type)}",
        "Expiry: "
        + ("eternal" if expiry.is_eternal else f"{expiry.ttl_seconds:g}s after creation"),
        "Max size: "
        + ("unbounded" if configuration.max_size is None else str(configuration.max_size)),
        f"Statistics: {'enabled' if configuration.statistics_enabled else 'disabled'}",
        f"Read-through: {'enabled' if configuration.read_through else 'disabled'}",
    ]
    return "\n".join(lines)
