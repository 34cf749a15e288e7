"""In-memory implementation of KeyValueStorage."""

import threading


class InMemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self.store: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self.store.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self.store[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self.store.pop(key, None)
