from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Iterable

from .catalog import DreamSymbol, EmptyCatalogError, SymbolCatalog
from .days import day_key, local_day, parse_day_key, shift_day
from .store import KeyValueStore, StoreUnavailableError

logger = logging.getLogger(__name__)

SYMBOL_KEY_PREFIX = "dailySymbol_"
LAST_UPDATED_KEY = "lastUpdatedDailySymbols"


def symbol_key(day: date) -> str:
    return SYMBOL_KEY_PREFIX + day_key(day)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SymbolWindow:
    today_date: date
    yesterday: DreamSymbol
    today: DreamSymbol
    tomorrow: DreamSymbol

    def slots(self) -> list[tuple[str, date, DreamSymbol]]:
        return [
            ("yesterday", shift_day(self.today_date, -1), self.yesterday),
            ("today", self.today_date, self.today),
            ("tomorrow", shift_day(self.today_date, 1), self.tomorrow),
        ]

    def slot(self, name: str) -> tuple[date, DreamSymbol]:
        for slot_name, day, symbol in self.slots():
            if slot_name == name:
                return day, symbol
        raise KeyError(name)


class DailySymbolScheduler:
    """Rolling yesterday/today/tomorrow window of dream symbols keyed by calendar day.

    Assignments live in the injected store under ``dailySymbol_YYYY-MM-DD`` and
    the last processed day under ``lastUpdatedDailySymbols``. Store failures
    never reach the caller: reads count as unassigned and failed writes are
    simply redrawn on the next access.
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: SymbolCatalog,
        tz: tzinfo = timezone.utc,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.tz = tz
        self._rng = rng or random.Random()
        self._clock = clock or _utc_now
        self._lock = threading.RLock()

    def today(self) -> date:
        return local_day(self._clock(), self.tz)

    def get_symbol(self, day: date) -> str:
        with self._lock:
            return self._get_symbol(day, self.today())

    def symbol_for(self, day: date) -> DreamSymbol:
        return self.catalog[self.get_symbol(day)]

    def check_and_advance(self, now: datetime | None = None) -> bool:
        """Shift the window once if a calendar day passed since the last call.

        Returns True when a shift happened. Gaps of several days still shift
        only once.
        """
        with self._lock:
            today = local_day(now or self._clock(), self.tz)
            raw = self._read_raw(LAST_UPDATED_KEY)
            last = parse_day_key(raw)

            if last is None:
                if raw:
                    logger.warning("Malformed rollover marker %r, resetting to %s", raw, today)
                else:
                    logger.info("Initializing daily symbol rollover marker at %s", today)
                self._write(LAST_UPDATED_KEY, day_key(today))
                return False

            if last == today:
                return False
            if last > today:
                logger.warning("Rollover marker %s is ahead of local day %s, skipping", last, today)
                return False

            self._shift(last, today)
            self._write(LAST_UPDATED_KEY, day_key(today))
            return True

    def window(self, now: datetime | None = None) -> SymbolWindow:
        with self._lock:
            moment = now or self._clock()
            self.check_and_advance(moment)
            today = local_day(moment, self.tz)
            resolved = []
            for offset in (-1, 0, 1):
                symbol_id = self._get_symbol(shift_day(today, offset), today)
                resolved.append(self.catalog[symbol_id])
            yesterday, current, tomorrow = resolved
            return SymbolWindow(today_date=today, yesterday=yesterday, today=current, tomorrow=tomorrow)

    def _get_symbol(self, day: date, today: date) -> str:
        if not len(self.catalog):
            raise EmptyCatalogError("Dream symbol catalog is empty")

        existing = self._read(day)
        if existing is not None:
            return existing

        symbol_id = self._draw(self._neighbours(day, today))
        self._write(symbol_key(day), symbol_id)
        logger.debug("Assigned dream symbol %s to %s", symbol_id, day)
        return symbol_id

    def _neighbours(self, day: date, today: date) -> set[str]:
        visible = [shift_day(today, offset) for offset in (-1, 0, 1)]
        if day not in visible:
            return set()
        taken = set()
        for other in visible:
            if other == day:
                continue
            symbol_id = self._read(other)
            if symbol_id is not None:
                taken.add(symbol_id)
        return taken

    def _shift(self, previous: date, today: date) -> None:
        yesterday = shift_day(today, -1)
        tomorrow = shift_day(today, 1)
        new_window = {yesterday, today, tomorrow}

        carried_yesterday = self._read(previous)
        carried_today = self._read(shift_day(previous, 1))

        stale = {shift_day(today, -2)}
        stale.update(shift_day(previous, offset) for offset in (-1, 0, 1))
        for day in sorted(stale - new_window):
            self._delete(day)

        for target, symbol_id in ((yesterday, carried_yesterday), (today, carried_today)):
            if symbol_id is None:
                self._delete(target)
            else:
                self._write(symbol_key(target), symbol_id)

        if not len(self.catalog):
            logger.warning("Dream symbol catalog is empty, leaving %s unassigned", tomorrow)
        else:
            excluded = {s for s in (carried_yesterday, carried_today) if s is not None}
            self._write(symbol_key(tomorrow), self._draw(excluded))

        logger.info("Shifted daily symbols from %s to %s", previous, today)

    def _draw(self, excluded: Iterable[str]) -> str:
        ids = self.catalog.ids()
        skip = set(excluded)
        candidates = [s for s in ids if s not in skip] or ids
        return self._rng.choice(candidates)

    def _read(self, day: date) -> str | None:
        symbol_id = self._read_raw(symbol_key(day))
        if symbol_id is None:
            return None
        if symbol_id not in self.catalog:
            logger.debug("Stored symbol %r for %s is not in the catalog", symbol_id, day)
            return None
        return symbol_id

    def _read_raw(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except StoreUnavailableError as exc:
            logger.warning("Symbol store read failed for %s: %s", key, exc)
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except StoreUnavailableError as exc:
            logger.warning("Symbol store write failed for %s, value not persisted: %s", key, exc)

    def _delete(self, day: date) -> None:
        key = symbol_key(day)
        try:
            self.store.remove(key)
        except StoreUnavailableError as exc:
            logger.warning("Symbol store delete failed for %s: %s", key, exc)
