from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from pymongo.collection import Collection
from pymongo.errors import PyMongoError


class StoreUnavailableError(RuntimeError):
    """The key-value backend could not be read or written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store. Flip ``available`` to simulate an unreachable backend."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailableError("memory store marked unavailable")

    def get(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self.data[key] = value

    def remove(self, key: str) -> None:
        self._check()
        self.data.pop(key, None)


class MongoKeyValueStore:
    def __init__(self, collection: Collection) -> None:
        self.collection = collection
        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        try:
            self.collection.create_index("key", unique=True)
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Could not prepare key-value collection: {exc}") from exc

    def get(self, key: str) -> str | None:
        try:
            row = self.collection.find_one({"key": key}, {"value": 1, "_id": 0})
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Read failed for {key!r}: {exc}") from exc
        if not row:
            return None
        value = row.get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            self.collection.update_one(
                {"key": key},
                {
                    "$set": {"value": value, "updated_at": now},
                    "$setOnInsert": {"key": key, "created_at": now},
                },
                upsert=True,
            )
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Write failed for {key!r}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            self.collection.delete_one({"key": key})
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Delete failed for {key!r}: {exc}") from exc
