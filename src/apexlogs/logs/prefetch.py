"""Persisted prefetch toggle.

Whether log bodies are downloaded right after the catalog is listed, or only
when a log is opened, is a convenience setting. Reading or writing it must
never fail the caller: a broken store reads as disabled and a failed write
is logged and dropped.
"""

from __future__ import annotations

import os
import tempfile
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import structlog
import yaml

from apexlogs.config.constants import PREFETCH_LOG_BODIES_KEY

logger = structlog.get_logger()

STATE_HEADER = """\
# AUTO-GENERATED - DO NOT EDIT MANUALLY
# Persisted apexlogs toggles. Delete this file to reset them.

"""


class KeyValueStore(Protocol):
    """Durable storage for small settings. Implementations may raise."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStateStore:
    """Process-local store, for tests and hosts without durable storage."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class YamlStateStore:
    """YAML mapping on disk. Writes replace the file atomically."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open() as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"state file {self.path} is not a mapping")
        return data

    def get(self, key: str) -> Any | None:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            content = STATE_HEADER + yaml.safe_dump(data, default_flow_style=False, sort_keys=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".yaml")
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(content)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise


class PrefetchState(Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"


class PrefetchStateStore:
    """Best-effort wrapper around a ``KeyValueStore`` for the prefetch flag."""

    def __init__(self, store: KeyValueStore, key: str = PREFETCH_LOG_BODIES_KEY) -> None:
        self._store = store
        self._key = key

    def restore(self) -> bool:
        """Last persisted value; False when unset or the store fails."""
        try:
            return bool(self._store.get(self._key))
        except Exception as e:
            logger.warning("prefetch_restore_failed", key=self._key, error=str(e))
            return False

    def persist(self, enabled: bool) -> None:
        """Write the flag. Failures are logged, never raised."""
        try:
            self._store.set(self._key, bool(enabled))
        except Exception as e:
            logger.warning("prefetch_persist_failed", key=self._key, enabled=enabled, error=str(e))

    def state(self) -> PrefetchState:
        return PrefetchState.ENABLED if self.restore() else PrefetchState.DISABLED
