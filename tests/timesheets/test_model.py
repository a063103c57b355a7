from __future__ import annotations

from datetime import date, datetime

import pytest

from src.timesheet_system.timesheet_system.core.enums import EntryStatus
from src.timesheet_system.timesheet_system.core.exceptions import InvalidTimeOrderError, ValidationError
from src.timesheet_system.timesheet_system.timesheets.model import TimeEntry


def _entry(**overrides):
    fields = dict(
        entry_id="e-1",
        employee_id="EMP001",
        employee_name="John Doe",
        work_date=date(2026, 3, 4),
        clock_in_time=datetime(2026, 3, 4, 9, 0),
        clock_out_time=None,
        status=EntryStatus.CLOCKED_IN,
    )
    fields.update(overrides)
    return TimeEntry(**fields)


def test_closed_status_requires_clock_out_time():
    with pytest.raises(ValidationError):
        _entry(status=EntryStatus.CLOCKED_OUT, total_hours=3.0)


def test_open_status_rejects_clock_out_time():
    with pytest.raises(ValidationError):
        _entry(clock_out_time=datetime(2026, 3, 4, 12, 0))


def test_clock_out_before_clock_in_rejected():
    with pytest.raises(InvalidTimeOrderError):
        _entry(clock_out_time=datetime(2026, 3, 4, 8, 59), status=EntryStatus.CLOCKED_OUT)


def test_consistent_entries_are_accepted():
    assert _entry().is_open
    closed = _entry(clock_out_time=datetime(2026, 3, 4, 9, 0), status=EntryStatus.CLOCKED_OUT, total_hours=0.0)
    assert not closed.is_open
