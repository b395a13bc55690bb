"""Fixed-offset (UTC+5:30) calendar helpers.

Every civil date maps to the UTC instant of its IST midnight. Day boundaries
are always computed as a fixed 24h jump from that instant, so "occurred on
day d" is the half-open interval ``[date_to_day_start(d), next_day_start(...))``.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from ..core.constants import CIVIL_DATE_FORMAT, IST_OFFSET, ONE_DAY
from ..core.exceptions import InvalidDateFormat

IST = timezone(IST_OFFSET, name="IST")


def parse_civil_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise InvalidDateFormat(f"Invalid date: {value!r}")

    parts = value.strip().split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise InvalidDateFormat(f"Invalid date: {value!r} (expected YYYY-MM-DD)")

    year, month, day = (int(p) for p in parts)
    if year <= 0 or month <= 0 or day <= 0:
        raise InvalidDateFormat(f"Invalid date: {value!r} (expected YYYY-MM-DD)")

    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateFormat(f"Invalid date: {value!r} ({exc})") from exc


def as_utc(instant: datetime) -> datetime:
    # MySQL DATETIME columns come back naive; they are stored as UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def date_to_day_start(civil_date: str) -> datetime:
    d = parse_civil_date(civil_date)
    try:
        return datetime(d.year, d.month, d.day, tzinfo=IST).astimezone(timezone.utc)
    except OverflowError as exc:
        # 0001-01-01 IST midnight is before datetime.min in UTC.
        raise InvalidDateFormat(f"Invalid date: {civil_date!r} (out of range)") from exc


def day_start_to_civil_date(instant: datetime) -> str:
    shifted = as_utc(instant) + IST_OFFSET
    return shifted.strftime(CIVIL_DATE_FORMAT)


def next_day_start(instant: datetime) -> datetime:
    return as_utc(instant) + ONE_DAY


def day_range(civil_date: str) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` interval covering one civil date."""
    start = date_to_day_start(civil_date)
    return start, next_day_start(start)


def now_utc() -> datetime:
    """Current instant (aware, UTC)."""
    return datetime.now(timezone.utc)


def today_civil_date(now: Optional[datetime] = None) -> str:
    return day_start_to_civil_date(now or now_utc())


def normalize_civil_date(value: str) -> str:
    """Validate and re-render a civil date (``2025-1-5`` -> ``2025-01-05``)."""
    return parse_civil_date(value).strftime(CIVIL_DATE_FORMAT)
