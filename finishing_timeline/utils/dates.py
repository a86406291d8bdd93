"""Date normalization shared by every timeline consumer.

API records carry dates as ISO strings, epoch milliseconds, or values that
were already parsed upstream. Everything funnels through ``to_datetime`` so
that all projections agree on what counts as a drawable date.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce a date-like value into an aware UTC datetime.

    Returns None for missing, empty, or unparseable input. Numbers are
    epoch milliseconds. Never raises.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        try:
            return _as_utc(value)
        except (OverflowError, ValueError):
            return None

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return _as_utc(datetime.fromisoformat(text))
        except (OverflowError, ValueError):
            return None

    return None


def add_days(value: datetime, days: int) -> datetime:
    """Shift a datetime by whole days."""
    return value + timedelta(days=days)


def format_date(value: Any) -> str:
    """Format a date-like value as YYYY-MM-DD, or '' when absent."""
    parsed = to_datetime(value)
    if parsed is None:
        return ""
    return parsed.strftime("%Y-%m-%d")
