from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from dream_symbols.daily_content import DailyContent, content_key
from dream_symbols.store import MemoryStore

DAY = date(2026, 3, 10)


class CountingLLM:
    def __init__(self) -> None:
        self.calls = []

    def daily_content(self, kind, day):
        self.calls.append((kind, day))
        return f"{kind} for {day.isoformat()} #{len(self.calls)}"


def make_content(store=None):
    llm = CountingLLM()
    store = store if store is not None else MemoryStore()
    clock = lambda: datetime(2026, 3, 10, 22, 30, tzinfo=timezone.utc)
    return DailyContent(store, llm, clock=clock), store, llm


def test_content_is_generated_once_per_day():
    content, store, llm = make_content()

    first = content.get("fact")
    second = content.get("fact")

    assert first == second == "fact for 2026-03-10 #1"
    assert llm.calls == [("fact", DAY)]
    assert store.data[content_key("fact", DAY)] == first


def test_fact_and_lesson_are_cached_separately():
    content, store, _ = make_content()

    assert content.get("fact", DAY) != content.get("lesson", DAY)
    assert content_key("lesson", DAY) == "dailyContent_lesson_2026-03-10"


def test_old_content_is_purged():
    store = MemoryStore({content_key("fact", date(2026, 3, 8)): "stale", content_key("fact", date(2026, 3, 9)): "kept"})
    content, _, _ = make_content(store)

    content.get("fact", DAY)

    assert content_key("fact", date(2026, 3, 8)) not in store.data
    assert store.data[content_key("fact", date(2026, 3, 9))] == "kept"


def test_unavailable_store_still_returns_content():
    store = MemoryStore()
    store.available = False
    content, _, llm = make_content(store)

    assert content.get("lesson") == "lesson for 2026-03-10 #1"
    assert content.get("lesson") == "lesson for 2026-03-10 #2"
    assert len(llm.calls) == 2


def test_unknown_kind_is_rejected():
    content, _, _ = make_content()

    with pytest.raises(ValueError):
        content.get("horoscope")
