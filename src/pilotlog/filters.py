"""Date range presets for the dashboard and statistics filters."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone
from enum import Enum


class DateFilter(str, Enum):
    ALL = "all"
    MONTH = "month"
    RANGE = "range"


def _start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


def _end_of_day(d: date) -> datetime:
    return datetime.combine(d, time.max, tzinfo=timezone.utc)


def resolve_date_range(
    mode: DateFilter | str,
    date_from: date | None = None,
    date_to: date | None = None,
    now: datetime | None = None,
) -> tuple[datetime | None, datetime | None]:
    """Turn a filter preset into inclusive (start, end) bounds in UTC.

    ``all`` has no bounds. ``month`` spans the current calendar month.
    ``range`` spans whole days from ``date_from`` to ``date_to``, or just
    ``date_from`` when no end is given; without ``date_from`` it is unbounded.
    """
    mode = DateFilter(mode)

    if mode is DateFilter.MONTH:
        today = (now or datetime.now(timezone.utc)).date()
        last_day = calendar.monthrange(today.year, today.month)[1]
        return (
            _start_of_day(today.replace(day=1)),
            _end_of_day(today.replace(day=last_day)),
        )

    if mode is DateFilter.RANGE and date_from is not None:
        return _start_of_day(date_from), _end_of_day(date_to or date_from)

    return None, None
