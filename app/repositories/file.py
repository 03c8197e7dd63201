"""
File-backed key-value store.
Keeps all keys in one JSON object, rewritten atomically on every change.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore:
    """KeyValueStore persisted to a JSON file of string values."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        self._lock = Lock()
        self._data: Dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Could not read storage file {self._path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.error(f"Storage file {self._path} does not hold a JSON object")
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()}

    def _write(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self._path)
        except OSError:
            os.unlink(tmp_path)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = {**self._data, key: value}
            self._write(data)
            self._data = data

    def remove_item(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                return
            data = {k: v for k, v in self._data.items() if k != key}
            self._write(data)
            self._data = data
