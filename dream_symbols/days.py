from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DAY_KEY_FORMAT = "%Y-%m-%d"


def resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", name)
        return timezone.utc


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of ``moment`` in ``tz``. Naive datetimes are read as local to ``tz``."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz).date()
    return moment.astimezone(tz).date()


def shift_day(day: date, days: int) -> date:
    return day + timedelta(days=days)


def day_key(day: date) -> str:
    return day.strftime(DAY_KEY_FORMAT)


def parse_day_key(raw: str | None) -> date | None:
    if not raw:
        return None
    try:
        return datetime.strptime(raw.strip(), DAY_KEY_FORMAT).date()
    except ValueError:
        return None

