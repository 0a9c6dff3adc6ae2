"""Status store port - Persisted enable flag per cache name.

Administrators toggle caches at runtime; the flag survives restarts
through this store and is consulted when a cache is created.
"""

from __future__ import annotations

from typing import Optional, Protocol


class CacheStatusStorePort(Protocol):
    """Port for persisting cache enable flags.

    Implementations:
    - adapters/status_store/memory_store.py (InMemoryStatusStore)
    - adapters/status_store/json_file_store.py (JsonFileStatusStore)
    """

    def get_status(self, name: str) -> Optional[bool]:
        """Return the persisted flag, or None if nothing was stored."""
        ...

    def set_status(self, name: str, enabled: bool) -> None: ...
