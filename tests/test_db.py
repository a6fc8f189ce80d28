from __future__ import annotations

from datetime import date, timedelta
from itertools import count
from types import SimpleNamespace

from dream_symbols.db import Database
from dream_symbols.streak import StreakState


def matches(doc: dict, query: dict) -> bool:
    for field, condition in query.items():
        if isinstance(condition, dict):
            if "$exists" in condition and (field in doc) != condition["$exists"]:
                return False
            if "$ne" in condition and doc.get(field) == condition["$ne"]:
                return False
        elif doc.get(field) != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, rows: list[dict]) -> None:
        self.rows = rows

    def __iter__(self):
        return iter(self.rows)

    def sort(self, field, direction):
        self.rows = sorted(self.rows, key=lambda row: row[field], reverse=direction < 0)
        return self

    def limit(self, n):
        self.rows = self.rows[:n]
        return self


class FakeCollection:
    def __init__(self) -> None:
        self.docs: list[dict] = []
        self.ids = count(1)

    def find_one(self, query, sort=None):
        rows = list(self.find(query))
        if sort:
            field, direction = sort[0]
            rows.sort(key=lambda row: row[field], reverse=direction < 0)
        return dict(rows[0]) if rows else None

    def find(self, query, projection=None):
        rows = [doc for doc in self.docs if matches(doc, query)]
        if projection:
            rows = [{k: v for k, v in doc.items() if projection.get(k)} for doc in rows]
        return FakeCursor(rows)

    def update_one(self, query, update, upsert=False):
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is None:
            if not upsert:
                return
            doc = {**query, **update.get("$setOnInsert", {})}
            self.docs.append(doc)
        doc.update(update.get("$set", {}))

    def insert_one(self, payload):
        doc = {"_id": next(self.ids), **payload}
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])


def make_db() -> Database:
    db = object.__new__(Database)
    db.users = FakeCollection()
    db.entries = FakeCollection()
    return db


def test_new_user_is_opted_in_to_daily_broadcast():
    db = make_db()

    user = db.ensure_user(1, "ana", chat_id=100)

    assert user["daily_broadcast"] is True
    assert user["chat_id"] == 100
    assert user["streak"] == 0
    assert db.get_broadcast_chats() == [100]


def test_returning_user_keeps_opt_out():
    db = make_db()
    db.ensure_user(1, "ana", chat_id=100)
    db.set_daily_broadcast(1, False)

    user = db.ensure_user(1, "ana_renamed", chat_id=100)

    assert user["daily_broadcast"] is False
    assert user["username"] == "ana_renamed"
    assert db.get_broadcast_chats() == []


def test_broadcast_needs_a_chat_and_no_opt_out():
    db = make_db()
    db.ensure_user(1, "with_chat", chat_id=100)
    db.ensure_user(2, "no_chat")
    db.ensure_user(3, "opted_out", chat_id=300)
    db.set_daily_broadcast(3, False)
    # Users stored before the opt-in flag existed have no daily_broadcast field.
    db.users.docs.append({"telegram_id": 4, "chat_id": 400})

    assert sorted(db.get_broadcast_chats()) == [100, 400]


def test_opting_back_in():
    db = make_db()
    db.ensure_user(1, "ana", chat_id=100)
    db.set_daily_broadcast(1, False)

    db.set_daily_broadcast(1, True)

    assert db.get_broadcast_chats() == [100]


def test_entries_are_saved_and_listed_newest_first():
    db = make_db()
    first = db.save_entry(1, {"description": "first", "entry_date": "2026-03-09"})
    db.save_entry(2, {"description": "someone else"})
    second = db.save_entry(1, {"description": "second", "entry_date": "2026-03-10"})
    db.entries.docs[0]["created_at"] -= timedelta(days=1)

    recent = db.get_recent_entries(1, limit=5)

    assert (first, second) == ("1", "3")
    assert [e["description"] for e in recent] == ["second", "first"]
    assert db.get_last_entry(1)["description"] == "second"
    assert db.get_recent_entries(1, limit=1)[0]["description"] == "second"


def test_journal_days_update_streak():
    db = make_db()
    db.ensure_user(1, "ana", chat_id=100)

    db.record_journal_day(1, date(2026, 3, 9))
    before, after = db.record_journal_day(1, date(2026, 3, 10))
    _, repeat = db.record_journal_day(1, date(2026, 3, 10))

    assert before == StreakState(current=1, best=1, last_log_day=date(2026, 3, 9))
    assert after == StreakState(current=2, best=2, last_log_day=date(2026, 3, 10))
    assert repeat == after
    user = db.users.find_one({"telegram_id": 1})
    assert (user["streak"], user["best_streak"], user["last_log_date"]) == (2, 2, "2026-03-10")


def test_unknown_user_has_empty_streak():
    assert make_db().get_streak(42) == StreakState()
