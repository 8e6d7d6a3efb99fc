from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from email.utils import parsedate_to_datetime

MINUTE_KEY_FORMAT = "%Y-%m-%d %H:%M"

_LOCAL_MINUTE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})[T ](\d{2}:\d{2})")


def _reference_tz(offset_minutes: int) -> timezone:
    return timezone(timedelta(minutes=offset_minutes))


def _as_utc(value: datetime) -> datetime:
    # Naive values come from the datastore session, which runs in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def trading_day(now: datetime, offset_minutes: int) -> str:
    """Calendar date (YYYY-MM-DD) of `now` in the fixed-offset reference timezone."""
    return _as_utc(now).astimezone(_reference_tz(offset_minutes)).date().isoformat()


def day_window(day: str, offset_minutes: int) -> tuple[datetime, datetime]:
    """
    Half-open UTC window [start, end) covering one reference-timezone calendar day.

    With the default UTC-5 offset, "2024-01-02" maps to
    [2024-01-02 05:00Z, 2024-01-03 05:00Z).
    """
    local_midnight = datetime.combine(
        date.fromisoformat(day),
        time(0, 0),
        tzinfo=_reference_tz(offset_minutes),
    )
    start_utc = local_midnight.astimezone(timezone.utc)
    return start_utc, start_utc + timedelta(days=1)


def parse_instant(value: str) -> datetime:
    """
    Parse a provider or datastore timestamp into an aware UTC datetime.

    Raises:
        ValueError: the string is neither ISO 8601 nor RFC 2822.
    """
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError):
            raise ValueError(f"Unrecognized timestamp: {value!r}")
    return _as_utc(parsed)


def utc_minute_key(value: datetime) -> str:
    return _as_utc(value).strftime(MINUTE_KEY_FORMAT)


def feed_minute_key(timestamp: str) -> str:
    """
    Minute key for a provider timestamp.

    A leading "YYYY-MM-DD[T ]HH:MM" is taken verbatim, without timezone conversion;
    anything else is parsed as an instant and keyed by its UTC minute.
    """
    match = _LOCAL_MINUTE_PREFIX.match(timestamp)
    if match:
        return f"{match.group(1)} {match.group(2)}"
    return utc_minute_key(parse_instant(timestamp))
