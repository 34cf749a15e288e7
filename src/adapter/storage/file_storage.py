"""JSON-file implementation of KeyValueStorage.

All keys live in one JSON object on disk. Writes go through a temp file
and os.replace() so a crash never leaves a half-written file behind.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from port.storage import StorageError

logger = logging.getLogger(__name__)


class FileStorage:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._cache: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._cache is not None:
            return self._cache

        data: dict[str, str] = {}
        try:
            raw = self.path.read_text(encoding="utf-8")
            parsed = json.loads(raw)
            if isinstance(parsed, dict):
                data = {k: v for k, v in parsed.items() if isinstance(k, str) and isinstance(v, str)}
            else:
                logger.warning("Storage file is not a JSON object, starting empty", extra={"path": str(self.path)})
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as e:
            logger.warning("Storage file unreadable, starting empty", extra={"path": str(self.path), "error": str(e)})

        self._cache = data
        return data

    def _flush(self, data: dict[str, str]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write storage file", extra={"path": str(self.path), "error": str(e)})
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(str(e)) from e

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = dict(self._load())
            data[key] = value
            self._flush(data)
            self._cache = data

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key not in data:
                return
            data = {k: v for k, v in data.items() if k != key}
            self._flush(data)
            self._cache = data
