"""Per-client view over a shared KeyValueStorage."""

from port.storage import KeyValueStorage


class ScopedStorage:
    """Prefixes every key with a client scope so clients never share state."""

    def __init__(self, storage: KeyValueStorage, scope: str):
        self._storage = storage
        self.prefix = f"client:{scope}:"

    def get(self, key: str) -> str | None:
        return self._storage.get(self.prefix + key)

    def set(self, key: str, value: str) -> None:
        self._storage.set(self.prefix + key, value)

    def remove(self, key: str) -> None:
        self._storage.remove(self.prefix + key)
