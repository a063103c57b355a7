from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Union

from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import Period
from ..core.exceptions import InvalidDateRangeError
from .model import DateRange


def week_bounds(today: date, *, week_start: int = DEFAULT_WEEK_START) -> tuple[date, date]:
    if not 0 <= week_start <= 6:
        raise InvalidDateRangeError(f"week_start must be 0..6, got {week_start}")
    start = today - timedelta(days=(today.weekday() - week_start) % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    start = today.replace(day=1)
    if start.month == 12:
        next_month = start.replace(year=start.year + 1, month=1)
    else:
        next_month = start.replace(month=start.month + 1)
    return start, next_month - timedelta(days=1)


def resolve_period(
    period: Union[Period, str],
    today: date,
    *,
    week_start: int = DEFAULT_WEEK_START,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> DateRange:
    """Map a period selector to an inclusive [start, end] range.

    ``start``/``end`` are only read for ``custom`` and are passed through as
    given; a reversed or incomplete custom range is rejected.
    """
    try:
        period = Period(period)
    except ValueError:
        raise InvalidDateRangeError(f"Unknown period: {period!r}") from None

    if period is Period.TODAY:
        return DateRange(today, today, period.value)
    if period is Period.WEEK:
        return DateRange(*week_bounds(today, week_start=week_start), period.value)
    if period is Period.MONTH:
        return DateRange(*month_bounds(today), period.value)

    if start is None or end is None:
        raise InvalidDateRangeError("Custom period needs both start and end dates")
    if end < start:
        raise InvalidDateRangeError(f"End date {end.isoformat()} is before start date {start.isoformat()}")
    return DateRange(start, end, period.value)
