from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Callable

from .days import day_key, local_day, shift_day
from .llm import SymbolLLM
from .store import KeyValueStore, StoreUnavailableError

logger = logging.getLogger(__name__)

CONTENT_KINDS = ("fact", "lesson")
CONTENT_KEY_PREFIX = "dailyContent_"


def content_key(kind: str, day: date) -> str:
    return f"{CONTENT_KEY_PREFIX}{kind}_{day_key(day)}"


class DailyContent:
    """One dream fact and one lucid dreaming lesson per local day, generated once and cached."""

    def __init__(
        self,
        store: KeyValueStore,
        llm: SymbolLLM,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.llm = llm
        self.tz = tz
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def today(self) -> date:
        return local_day(self.clock(), self.tz)

    def get(self, kind: str, day: date | None = None) -> str:
        if kind not in CONTENT_KINDS:
            raise ValueError(f"Unknown daily content kind: {kind!r}")
        day = day or self.today()
        key = content_key(kind, day)

        try:
            cached = self.store.get(key)
        except StoreUnavailableError as exc:
            logger.warning("Daily content read failed for %s: %s", key, exc)
            cached = None
        if cached:
            return cached

        text = self.llm.daily_content(kind, day)
        try:
            self.store.set(key, text)
            # The day before yesterday is never shown again.
            self.store.remove(content_key(kind, shift_day(day, -2)))
        except StoreUnavailableError as exc:
            logger.warning("Daily content write failed for %s: %s", key, exc)
        return text
