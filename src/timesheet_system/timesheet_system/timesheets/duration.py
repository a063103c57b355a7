"""Elapsed and live working time for time entries."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Union

from ..common.datetime_utils import format_hms as _format_seconds
from ..common.datetime_utils import whole_seconds
from ..core.exceptions import InvalidTimeOrderError
from .model import TimeEntry


def elapsed(start: datetime, end: datetime) -> timedelta:
    if end < start:
        raise InvalidTimeOrderError(f"end {end.isoformat()} precedes start {start.isoformat()}")
    return end - start


def elapsed_hours(start: datetime, end: datetime) -> float:
    """Hours between ``start`` and ``end`` as a non-negative float."""
    return elapsed(start, end).total_seconds() / 3600


def _live_delta(entry: TimeEntry, reference_now: datetime) -> timedelta:
    if entry.clock_out_time is None:
        return elapsed(entry.clock_in_time, reference_now)
    return elapsed(entry.clock_in_time, entry.clock_out_time)


def live_duration(entry: TimeEntry, reference_now: datetime) -> float:
    """Working hours so far.

    Closed entries measure clock-in to clock-out; open entries measure up to
    ``reference_now``, so the value changes on every call and is never stored.
    """
    return _live_delta(entry, reference_now).total_seconds() / 3600


def format_hms(duration: Union[timedelta, float]) -> str:
    if not isinstance(duration, timedelta):
        duration = timedelta(hours=duration)
    if duration < timedelta(0):
        raise InvalidTimeOrderError("cannot format a negative duration")
    return _format_seconds(whole_seconds(duration))


def live_duration_hms(entry: TimeEntry, reference_now: datetime) -> str:
    return format_hms(_live_delta(entry, reference_now))
