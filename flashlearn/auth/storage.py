"""
Durable key-value storage for auth state.

Mirrors the browser's localStorage surface (get/set/remove of string values
by key). JsonFileStorage keeps one file per key under ~/.flashlearn/ so a
session survives process restarts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


# Default storage directory
STORAGE_DIR = Path.home() / ".flashlearn"


class KeyValueStorage(Protocol):
    """String slots addressed by key."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage. Used by tests and embedded callers."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class JsonFileStorage:
    """
    File-backed storage.

    Each key is stored as {directory}/{key}.json. The directory is created
    on the first write.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else STORAGE_DIR

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        filepath = self._path(key)
        if not filepath.exists():
            return None
        return filepath.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        filepath = self._path(key)
        if filepath.exists():
            filepath.unlink()
