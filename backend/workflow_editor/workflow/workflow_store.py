"""
Workflow Store — durable key-value records for saved workflows.

``PersistenceGateway`` talks to storage only through the
``KeyValueStore`` interface so the editor core stays storage-agnostic.
``JsonFileKeyValueStore`` keeps one file per key under a directory and
replaces it atomically; ``InMemoryKeyValueStore`` backs tests.
"""

from __future__ import annotations

import tempfile
from abc import ABC, abstractmethod
from logging import getLogger
from pathlib import Path
from typing import Dict, Optional

from workflow_editor.errors import PersistenceError

logger = getLogger(__name__)


class KeyValueStore(ABC):
    """String records addressed by key."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the record for ``key`` or ``None``."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the record for ``key`` in a single step."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a record. Returns whether it existed."""


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, records: Optional[Dict[str, str]] = None) -> None:
        self._records: Dict[str, str] = dict(records or {})

    def get(self, key: str) -> Optional[str]:
        return self._records.get(key)

    def set(self, key: str, value: str) -> None:
        self._records[key] = value

    def delete(self, key: str) -> bool:
        return self._records.pop(key, None) is not None


class JsonFileKeyValueStore(KeyValueStore):
    """Persist records as ``<key>.json`` files in a directory."""

    def __init__(self, storage_dir: Path) -> None:
        self._dir = Path(storage_dir).expanduser()
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create storage dir {self._dir}: {e}") from e
        logger.info(f"JsonFileKeyValueStore initialized at {self._dir}")

    @property
    def storage_dir(self) -> Path:
        return self._dir

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot read record '{key}': {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path: Optional[Path] = None
        try:
            # Temp file in the same directory so the replace stays on one filesystem
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self._dir),
                prefix=path.stem + ".",
                suffix=".tmp",
                delete=False,
            ) as tf:
                tmp_path = Path(tf.name)
                tf.write(value)
            tmp_path.replace(path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write record '{key}': {e}") from e
        logger.debug(f"Record written: {key} ({len(value)} chars)")

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise PersistenceError(f"Cannot delete record '{key}': {e}") from e
        logger.info(f"Record deleted: {key}")
        return True

    # ── Internals ──

    def _path_for(self, key: str) -> Path:
        # Sanitize key for filesystem
        safe_key = "".join(c for c in key if c.isalnum() or c in "-_")
        if not safe_key:
            raise PersistenceError(f"Invalid record key: {key!r}")
        return self._dir / f"{safe_key}.json"
