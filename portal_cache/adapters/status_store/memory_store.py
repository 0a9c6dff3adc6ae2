"""In-memory status store.

Flags live for the lifetime of the process. Used when no status file is
configured and in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class InMemoryStatusStore:
    """Dict-backed CacheStatusStorePort."""

    _statuses: Dict[str, bool] = field(default_factory=dict, repr=False)

    def get_status(self, name: str) -> Optional[bool]:
        return self._statuses.get(name)

    def set_status(self, name: str, enabled: bool) -> None:
        self._statuses[name] = bool(enabled)
