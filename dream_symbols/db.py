from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from pymongo import MongoClient
from pymongo.collection import Collection

from .store import MongoKeyValueStore
from .streak import StreakState


class Database:
    def __init__(self, uri: str, db_name: str) -> None:
        self.client = MongoClient(uri)
        self.db = self.client[db_name]
        self.users: Collection = self.db["users"]
        self.entries: Collection = self.db["dream_entries"]
        self.symbol_store = MongoKeyValueStore(self.db["daily_symbols"])
        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        self.users.create_index("telegram_id", unique=True)
        self.entries.create_index([("telegram_id", 1), ("created_at", -1)])

    def ensure_user(self, telegram_id: int, username: str | None, chat_id: int | None = None) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        updates = {
            "username": username,
            "updated_at": now,
        }
        if chat_id is not None:
            updates["chat_id"] = chat_id

        self.users.update_one(
            {"telegram_id": telegram_id},
            {
                "$setOnInsert": {
                    "telegram_id": telegram_id,
                    "created_at": now,
                    "daily_broadcast": True,
                    "streak": 0,
                    "best_streak": 0,
                },
                "$set": updates,
            },
            upsert=True,
        )
        return self.users.find_one({"telegram_id": telegram_id}) or {}

    def set_daily_broadcast(self, telegram_id: int, enabled: bool) -> None:
        self.users.update_one(
            {"telegram_id": telegram_id},
            {"$set": {"daily_broadcast": enabled, "updated_at": datetime.now(timezone.utc)}},
        )

    def get_broadcast_chats(self) -> list[int]:
        rows = self.users.find(
            {"chat_id": {"$exists": True}, "daily_broadcast": {"$ne": False}},
            {"chat_id": 1, "_id": 0},
        )
        return [int(row["chat_id"]) for row in rows if row.get("chat_id") is not None]

    def save_entry(self, telegram_id: int, entry: dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **entry,
            "telegram_id": telegram_id,
            "created_at": now,
            "updated_at": now,
        }
        result = self.entries.insert_one(payload)
        return str(result.inserted_id)

    def get_last_entry(self, telegram_id: int) -> dict[str, Any] | None:
        return self.entries.find_one({"telegram_id": telegram_id}, sort=[("created_at", -1)])

    def get_recent_entries(self, telegram_id: int, limit: int = 30) -> list[dict[str, Any]]:
        return list(self.entries.find({"telegram_id": telegram_id}).sort("created_at", -1).limit(limit))

    def get_streak(self, telegram_id: int) -> StreakState:
        user = self.users.find_one({"telegram_id": telegram_id}) or {}
        return StreakState.from_document(user)

    def record_journal_day(self, telegram_id: int, day: date) -> tuple[StreakState, StreakState]:
        """Count ``day`` toward the user's streak. Returns the state before and after."""
        before = self.get_streak(telegram_id)
        after = before.log(day)
        if after != before:
            self.users.update_one(
                {"telegram_id": telegram_id},
                {"$set": {**after.to_document(), "updated_at": datetime.now(timezone.utc)}},
            )
        return before, after
