"""Key-value persistence backed by a JSON file."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Small key-value store persisted as a single JSON object.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written file behind.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: JSON file location. Parent directories are created on first write.
        """
        self._path = path
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        if not self._path.exists():
            self._data = {}
            return self._data
        try:
            with open(self._path, encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self._path}: {e}")
            loaded = {}
        self._data = loaded if isinstance(loaded, dict) else {}
        return self._data

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._load(), f, indent=2, default=str)
            os.replace(tmp_path, self._path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._flush()
