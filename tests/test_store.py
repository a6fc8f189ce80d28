from __future__ import annotations

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from dream_symbols.store import MemoryStore, MongoKeyValueStore, StoreUnavailableError


class FakeCollection:
    def __init__(self) -> None:
        self.docs: dict[str, dict] = {}
        self.indexes: list[tuple[str, bool]] = []
        self.down = False

    def _check(self) -> None:
        if self.down:
            raise ServerSelectionTimeoutError("mongo unreachable")

    def create_index(self, key, unique=False):
        self._check()
        self.indexes.append((key, unique))

    def find_one(self, query, projection=None):
        self._check()
        doc = self.docs.get(query["key"])
        return {"value": doc["value"]} if doc else None

    def update_one(self, query, update, upsert=False):
        self._check()
        key = query["key"]
        if key not in self.docs:
            if not upsert:
                return
            self.docs[key] = dict(update.get("$setOnInsert", {}))
        self.docs[key].update(update["$set"])

    def delete_one(self, query):
        self._check()
        self.docs.pop(query["key"], None)


def test_memory_store_roundtrip_and_remove():
    store = MemoryStore()
    assert store.get("k") is None

    store.set("k", "v")
    assert store.get("k") == "v"

    store.remove("k")
    store.remove("missing")
    assert store.get("k") is None


def test_memory_store_unavailable_raises():
    store = MemoryStore({"k": "v"})
    store.available = False

    with pytest.raises(StoreUnavailableError):
        store.get("k")
    with pytest.raises(StoreUnavailableError):
        store.set("k", "w")
    with pytest.raises(StoreUnavailableError):
        store.remove("k")


def test_mongo_store_creates_unique_key_index():
    collection = FakeCollection()
    MongoKeyValueStore(collection)

    assert collection.indexes == [("key", True)]


def test_mongo_store_upserts_and_overwrites():
    collection = FakeCollection()
    store = MongoKeyValueStore(collection)

    store.set("dailySymbol_2026-03-10", "owl")
    created_at = collection.docs["dailySymbol_2026-03-10"]["created_at"]
    store.set("dailySymbol_2026-03-10", "wolf")

    assert store.get("dailySymbol_2026-03-10") == "wolf"
    assert collection.docs["dailySymbol_2026-03-10"]["created_at"] == created_at

    store.remove("dailySymbol_2026-03-10")
    assert store.get("dailySymbol_2026-03-10") is None


def test_mongo_store_ignores_non_string_values():
    collection = FakeCollection()
    store = MongoKeyValueStore(collection)
    collection.docs["odd"] = {"key": "odd", "value": 42}

    assert store.get("odd") is None


def test_mongo_store_translates_driver_errors():
    collection = FakeCollection()
    store = MongoKeyValueStore(collection)
    collection.down = True

    with pytest.raises(StoreUnavailableError):
        store.get("k")
    with pytest.raises(StoreUnavailableError):
        store.set("k", "v")
    with pytest.raises(StoreUnavailableError):
        store.remove("k")
