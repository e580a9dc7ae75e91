"""Durable key-value storage backends for client-side state."""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "studyPlan_"


class StorageError(Exception):
    """Raised when a storage read or write fails."""


class KeyValueStore(Protocol):
    """Minimal string key-value interface (get/set by key)."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


def storage_key(user_id: str) -> str:
    """Storage key holding the plan for a user."""
    return f"{STORAGE_KEY_PREFIX}{user_id}"


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


class MemoryStore:
    """
    In-process key-value store.

    If quota_bytes is set, a write that would push the total UTF-8 size of keys
    and values past the quota raises StorageError and leaves the store unchanged.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None, quota_bytes: Optional[int] = None):
        self._items: dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            size = sum(_utf8_len(k) + _utf8_len(v) for k, v in self._items.items() if k != key)
            size += _utf8_len(key) + _utf8_len(value)
            if size > self.quota_bytes:
                raise StorageError(f"Quota exceeded: {size} > {self.quota_bytes} bytes")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStore:
    """Key-value store persisted as a single JSON object file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not contain a JSON object")
        return data

    def _write_all(self, items: dict[str, str]) -> None:
        """Write all items atomically (write temp then replace)."""
        temp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for {key!r} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)
        logger.debug("Stored %d bytes under %s", len(value), key)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

    def keys(self) -> list[str]:
        return list(self._read_all())
