"""Typed domain errors for the portal cache layer.

All errors inherit from PortalCacheError and can optionally wrap a
root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PortalCacheError(Exception):
    """Base error for the portal cache layer.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class CacheProviderError(PortalCacheError):
    """The cache provider failed to perform an operation.

    Attributes:
        cache_name: Name of the cache involved
    """

    cache_name: str = ""


@dataclass
class CacheClosedError(CacheProviderError):
    """An operation was attempted on a closed cache."""


@dataclass
class CacheNotFoundError(PortalCacheError):
    """No cache service is registered under the requested name.

    Attributes:
        cache_name: The name that was looked up
    """

    cache_name: str = ""


@dataclass
class StatusStoreError(PortalCacheError):
    """The persisted cache status could not be read or written.

    Attributes:
        path: Location of the status store if relevant
    """

    path: Optional[str] = None
