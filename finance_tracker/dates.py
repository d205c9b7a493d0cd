"""Calendar date helpers.

Every date in the tracker is a timezone-naive ``datetime.date``. Records
store them as ``YYYY-MM-DD`` strings; all parsing and day arithmetic goes
through this module so that no caller has to split strings or reason about
time-of-day.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import List, Tuple, Union

DateLike = Union[date, datetime, str]

ISO_FORMAT = "%Y-%m-%d"
SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value: DateLike) -> date:
    """Coerce a ``YYYY-MM-DD`` string, ``date`` or ``datetime`` to a ``date``.

    Raises:
        ValueError: If ``value`` is empty or not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a calendar date: {value!r}")
    return datetime.strptime(value.strip()[:10], ISO_FORMAT).date()


def format_iso(value: DateLike) -> str:
    return parse_date(value).strftime(ISO_FORMAT)


def window_start(reference: date, days: int) -> date:
    """Return the first day of an inclusive ``days``-long window ending at ``reference``."""
    return reference - timedelta(days=days - 1)


def date_range(start: date, end: date) -> List[date]:
    """Return every calendar day from ``start`` to ``end`` inclusive."""
    span = (end - start).days
    return [start + timedelta(days=offset) for offset in range(span + 1)]


def previous_month(month: int, year: int) -> Tuple[int, int]:
    """Return ``(month, year)`` of the calendar month before the given one."""
    if month == 1:
        return 12, year - 1
    return month - 1, year


def end_of_previous_month(today: date) -> date:
    """Return the last day of the calendar month before ``today``."""
    return today.replace(day=1) - timedelta(days=1)


def days_between(start: DateLike, end: DateLike) -> int:
    return (parse_date(end) - parse_date(start)).days


def days_remaining(deadline: DateLike, today: DateLike) -> int:
    """Whole days from ``today`` until ``deadline``; negative when overdue."""
    return days_between(today, deadline)


def to_datetime(value: Union[int, float, DateLike]) -> datetime:
    """Interpret epoch milliseconds, a datetime, a date or an ISO string as a local datetime."""
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000)
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value)
    return datetime.combine(parse_date(value), time.min)


def timestamp_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def days_taken(created_at: Union[int, float, DateLike], achieved_at: DateLike) -> int:
    """Days from goal creation until midnight of the achievement date, rounded up.

    The result may be zero or negative when a goal is achieved on the day it
    was created; callers clamp to ``>= 0`` for display.
    """
    start = to_datetime(created_at)
    end = datetime.combine(parse_date(achieved_at), time.min)
    elapsed = (end - start).total_seconds() / SECONDS_PER_DAY
    return int(math.ceil(elapsed))
