from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from ..core.constants import UNSET_TIME_VALUES

DateLike = Union[date, str, None]
TimeLike = Union[time, str, None]

_UTC_OFFSET_RE = re.compile(r"UTC\s*([+-])(\d{1,2})(?::(\d{1,2}))?")
_ISO_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_utc() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_unset_time(value: object) -> bool:
    """True for the stored placeholders that mean "no time recorded"."""
    if value is None:
        return True
    text = str(value).strip()
    return text in UNSET_TIME_VALUES or ":" not in text


def parse_time_str(value: TimeLike) -> Optional[time]:
    if isinstance(value, time):
        return value
    if is_unset_time(value):
        return None
    parts = str(value).strip().split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(float(parts[2])) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)
    except (ValueError, IndexError, OverflowError):
        return None


def _as_date(value: DateLike) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return parse_iso_date(str(value).strip().replace("/", "-"))
    except ValueError:
        return None


def parse_time_on_date(work_date: DateLike, clock_time: TimeLike) -> Optional[datetime]:
    """Combine a date and a time-of-day into a naive instant.

    Returns None (never raises) when either side is missing, a sentinel, or
    unparseable. Both ends of any subtraction are built the same way, so the
    missing timezone cancels out.
    """
    d = _as_date(work_date)
    if d is None:
        return None
    t = parse_time_str(clock_time)
    if t is None:
        return None
    return datetime.combine(d, t)


def elapsed_seconds(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Whole seconds from start to end, floored at zero."""
    if start is None or end is None:
        return 0
    return max(0, math.floor((end - start).total_seconds()))


def parse_utc_offset(tz: Optional[str]) -> Optional[timedelta]:
    """Parse "UTC+5:30 (IST)" style strings. Minutes carry the sign of the offset."""
    if not tz:
        return None
    match = _UTC_OFFSET_RE.search(tz)
    if not match:
        return None
    sign = -1 if match.group(1) == "-" else 1
    hours = int(match.group(2))
    minutes = int(match.group(3) or 0)
    return sign * timedelta(hours=hours, minutes=minutes)


def company_now(tz: Optional[str], *, utc_now: Optional[datetime] = None) -> datetime:
    """Organization wall-clock time for a configured UTC offset.

    Falls back to the client's local time when the offset cannot be parsed.
    """
    offset = parse_utc_offset(tz)
    if offset is None:
        return now_local()
    base = utc_now if utc_now is not None else now_utc()
    return base + offset


def clean_date_str(value: object) -> Optional[str]:
    """Normalize assorted date payloads to YYYY-MM-DD, or None."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return None
    text = str(value).strip()
    if text in {"", "null", "undefined"}:
        return None
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", text):
        return text
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        match = _ISO_DATE_RE.search(text)
        return match.group(1) if match else None


def format_seconds(seconds: int) -> str:
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value is not None else None
