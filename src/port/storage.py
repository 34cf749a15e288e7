"""Key-value storage port — where per-client reader state lives."""

from typing import Protocol


class StorageError(Exception):
    """Backend failed to persist a value."""


class KeyValueStorage(Protocol):
    """Opaque string key → string value storage.

    get() returns None for missing keys and for unreadable backends.
    set() and remove() may raise StorageError.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
