"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the cache layer
configuration. Every value can be overridden via environment variables:
- PORTAL_CACHE_DEFAULT_ENABLED=false
- PORTAL_CACHE_STATUS_FILE=/var/lib/portal/cache_status.json
- PORTAL_CACHE_DEFAULT_TTL_SECONDS=600
- PORTAL_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheConfig(BaseSettings):
    """Cache provider and status configuration.

    Environment variables prefixed with PORTAL_CACHE_.
    """

    model_config = SettingsConfigDict(env_prefix="PORTAL_CACHE_")

    # Status of a cache that has never been toggled by an administrator
    default_enabled: bool = True
    # JSON file holding the enable flags; in-memory store when unset
    status_file: Optional[Path] = None
    default_ttl_seconds: Optional[float] = Field(default=None, gt=0)
    default_max_size: int = Field(default=10_000, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with PORTAL_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="PORTAL_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.cache.default_enabled)
        print(config.observability.level)

    Environment variables prefixed with PORTAL_.
    """

    model_config = SettingsConfigDict(env_prefix="PORTAL_")

    cache: CacheConfig = Field(default_factory=CacheConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
