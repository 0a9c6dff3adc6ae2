"""Status store adapters - Implementations of CacheStatusStorePort.

Available implementations:
- InMemoryStatusStore: Process-lifetime flags
- JsonFileStatusStore: Flags persisted in a JSON file
"""

from .json_file_store import JsonFileStatusStore
from .memory_store import InMemoryStatusStore

__all__ = ["InMemoryStatusStore", "JsonFileStatusStore"]
