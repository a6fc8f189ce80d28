from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from dream_symbols.days import day_key, local_day, parse_day_key, resolve_timezone, shift_day


def test_local_day_converts_aware_datetimes():
    tokyo = ZoneInfo("Asia/Tokyo")
    moment = datetime(2026, 6, 30, 20, 0, tzinfo=timezone.utc)

    assert local_day(moment, tokyo) == date(2026, 7, 1)
    assert local_day(moment, timezone.utc) == date(2026, 6, 30)


def test_local_day_reads_naive_datetimes_as_local():
    assert local_day(datetime(2026, 6, 30, 23, 59), ZoneInfo("Asia/Tokyo")) == date(2026, 6, 30)


def test_shift_day_crosses_month_and_leap_day():
    assert shift_day(date(2028, 2, 28), 1) == date(2028, 2, 29)
    assert shift_day(date(2026, 3, 1), -1) == date(2026, 2, 28)


def test_day_key_roundtrip():
    assert day_key(date(2026, 1, 2)) == "2026-01-02"
    assert parse_day_key("2026-01-02") == date(2026, 1, 2)


def test_parse_day_key_rejects_garbage():
    assert parse_day_key(None) is None
    assert parse_day_key("") is None
    assert parse_day_key("02/01/2026") is None
    assert parse_day_key("2026-13-01") is None


def test_resolve_timezone_falls_back_to_utc():
    assert resolve_timezone("Not/AZone") is timezone.utc
    assert resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")
