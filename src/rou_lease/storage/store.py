"""Key-value stores — the persistence boundary.

The engine never touches a store.  Stores follow the collaborator
contract: ``save``/``delete``/``clear`` report success as ``bool`` and
``load`` returns ``None`` when a key is absent or unreadable.  Failures
are logged, not raised, so a broken disk never takes down a result that
was already calculated.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Protocol

from rou_lease.exceptions import StorageError
from rou_lease.logging_config import get_logger

logger = get_logger("storage")


class KeyValueStore(Protocol):
    """Minimal persistence interface used by drafts and history."""

    def save(self, key: str, value: Any) -> bool: ...

    def load(self, key: str) -> Any | None: ...

    def delete(self, key: str) -> bool: ...

    def clear(self) -> bool: ...


class InMemoryStore:
    """Process-local store; values are JSON round-tripped to mimic disk."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def save(self, key: str, value: Any) -> bool:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("store_save_failed", extra={"key": key}, exc_info=True)
            return False
        with self._lock:
            self._data[key] = encoded
        return True

    def load(self, key: str) -> Any | None:
        with self._lock:
            encoded = self._data.get(key)
        return None if encoded is None else json.loads(encoded)

    def delete(self, key: str) -> bool:
        with self._lock:
            self._data.pop(key, None)
        return True

    def clear(self) -> bool:
        with self._lock:
            self._data.clear()
        return True


class JsonFileStore:
    """All keys in one JSON document on disk.

    Raises ``StorageError`` at construction when the parent directory
    cannot be created.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(str(self.path), str(exc)) from exc

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def save(self, key: str, value: Any) -> bool:
        with self._lock:
            try:
                data = self._read()
                data[key] = value
                self._write(data)
            except (OSError, TypeError, ValueError):
                logger.warning("store_save_failed", extra={"key": key, "path": str(self.path)}, exc_info=True)
                return False
        return True

    def load(self, key: str) -> Any | None:
        with self._lock:
            try:
                return self._read().get(key)
            except (OSError, ValueError):
                logger.warning("store_load_failed", extra={"key": key, "path": str(self.path)}, exc_info=True)
                return None

    def delete(self, key: str) -> bool:
        with self._lock:
            try:
                data = self._read()
                if key in data:
                    del data[key]
                    self._write(data)
            except (OSError, ValueError):
                logger.warning("store_delete_failed", extra={"key": key, "path": str(self.path)}, exc_info=True)
                return False
        return True

    def clear(self) -> bool:
        with self._lock:
            try:
                self.path.unlink(missing_ok=True)
            except OSError:
                logger.warning("store_clear_failed", extra={"path": str(self.path)}, exc_info=True)
                return False
        return True
