"""JSON file status store.

Persists the enable flag of every cache in a single JSON object
(``{"PageCacheService": true, ...}``) so administrative toggles survive
restarts.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from ...domain.errors import StatusStoreError


@dataclass
class JsonFileStatusStore:
    """CacheStatusStorePort backed by a JSON file.

    A missing file reads as an empty store. Writes replace the file
    atomically.

    Attributes:
        path: Location of the JSON file
    """

    path: Path

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def _read(self) -> Dict[str, bool]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StatusStoreError(
                "Cannot read cache status file", cause=e, path=str(self.path)
            ) from e

        if not isinstance(data, dict):
            raise StatusStoreError(
                "Cache status file must contain a JSON object", path=str(self.path)
            )
        for name, value in data.items():
            if not isinstance(value, bool):
                raise StatusStoreError(
                    f"Cache status of {name!r} must be a JSON boolean",
                    path=str(self.path),
                )
        return {str(name): value for name, value in data.items()}

    def _write(self, statuses: Dict[str, bool]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(statuses, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StatusStoreError(
                "Cannot write cache status file", cause=e, path=str(self.path)
            ) from e

    def get_status(self, name: str) -> Optional[bool]:
        with self._lock:
            return self._read().get(name)

    def set_status(self, name: str, enabled: bool) -> None:
        with self._lock:
            statuses = self._read()
            statuses[name] = bool(enabled)
            self._write(statuses)
        self._logger.debug(
            "Cache status saved",
            extra={"cache": name, "enabled": bool(enabled), "path": str(self.path)},
        )
