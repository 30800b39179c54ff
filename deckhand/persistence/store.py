"""
Key-Value Stores - Synchronous storage backends for the session record.

Stores:
- MemoryStore: dict-backed, optional capacity to emulate quota limits
- FileStore: a single JSON file holding key -> string

Design decisions:
- Values are strings (the gateway encodes/decodes JSON)
- Failures raise StorageError (or OSError from the filesystem);
  the gateway decides what to do with them
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a store cannot complete a read or write."""


class KeyValueStore(Protocol):
    """The storage interface the persistence gateway needs."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """
    In-memory store.

    capacity limits the total characters stored; exceeding it raises
    StorageError like a browser quota would.
    """

    def __init__(self, capacity: int | None = None):
        self.capacity = capacity
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.capacity is not None:
            used = sum(len(v) for k, v in self._items.items() if k != key)
            if used + len(value) > self.capacity:
                raise StorageError("Storage quota exceeded")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStore:
    """
    File-backed store.

    Usage:
        store = FileStore("~/.deckhand/state.json")
        store.set_item("deckhand.session", payload)
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Store file is corrupt: {e}") from e
        if not isinstance(data, dict):
            raise StorageError("Store file does not hold an object")
        return data

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2)
        tmp_path.replace(self.path)

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except StorageError as e:
            logger.debug("Overwriting unreadable store file %s: %s", self.path, e)
            items = {}
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)
