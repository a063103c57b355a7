from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from src.timesheet_system.timesheet_system.core.enums import EntryState, EntryStatus
from src.timesheet_system.timesheet_system.core.exceptions import (
    DuplicateClockInError,
    DuplicateKeyError,
    InvalidTimeOrderError,
    NotClockedInError,
)
from src.timesheet_system.timesheet_system.timesheets.duration import elapsed_hours
from src.timesheet_system.timesheet_system.timesheets.service import TimesheetService
from conftest import InMemoryTimeEntries, make_entry


def test_clock_in_persists_open_entry(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)

    entry = svc.clock_in("EMP001", "John Doe", now=fixed_now)

    stored = entries_repo.find_entry("EMP001", fixed_now.date())
    assert stored == entry
    assert stored.status == EntryStatus.CLOCKED_IN


def test_second_clock_in_leaves_stored_entry_unchanged(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)
    first = svc.clock_in("EMP001", "John Doe", now=fixed_now)

    with pytest.raises(DuplicateClockInError):
        svc.clock_in("EMP001", "John Doe", now=fixed_now + timedelta(minutes=5))

    assert entries_repo.find_entry("EMP001", fixed_now.date()) == first
    assert entries_repo.inserts == 1


def test_clock_in_race_is_reported_as_duplicate(entries_repo, fixed_now):
    class RacingRepo(type(entries_repo)):
        def find_entry(self, employee_id, work_date):
            # Simulates a concurrent insert landing after our read.
            return None

        def insert_entry(self, entry):
            raise DuplicateKeyError("uq_time_entries_employee_date")

    svc = TimesheetService(RacingRepo())

    with pytest.raises(DuplicateClockInError):
        svc.clock_in("EMP001", "John Doe", now=fixed_now)


def test_clock_out_closes_entry(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)
    svc.clock_in("EMP001", "John Doe", now=fixed_now)

    closed = svc.clock_out("EMP001", now=fixed_now.replace(hour=17, minute=30))

    assert closed.status == EntryStatus.CLOCKED_OUT
    assert closed.total_hours == 8.5
    assert entries_repo.find_entry("EMP001", fixed_now.date()).total_hours == 8.5


def test_clock_out_without_clock_in(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)

    with pytest.raises(NotClockedInError):
        svc.clock_out("EMP001", now=fixed_now)


def test_clock_out_after_closed_by_someone_else(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)
    opened = svc.clock_in("EMP001", "John Doe", now=fixed_now)

    class StaleReadRepo(type(entries_repo)):
        def find_entry(self, employee_id, work_date):
            return opened

    stale = StaleReadRepo([entries_repo.update_entry(
        opened.entry_id,
        {"status": EntryStatus.CLOCKED_OUT, "clock_out_time": fixed_now.replace(hour=12), "total_hours": 3.0},
    )])

    with pytest.raises(NotClockedInError):
        TimesheetService(stale).clock_out("EMP001", now=fixed_now.replace(hour=17))


def test_clock_out_before_clock_in_rejected(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)
    svc.clock_in("EMP001", "John Doe", now=fixed_now)

    with pytest.raises(InvalidTimeOrderError):
        svc.clock_out("EMP001", now=fixed_now - timedelta(minutes=1))

    assert entries_repo.find_entry("EMP001", fixed_now.date()).status == EntryStatus.CLOCKED_IN


def test_today_status_live_working_time(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo)
    svc.clock_in("EMP001", "John Doe", now=fixed_now)

    status = svc.today_status("EMP001", now=fixed_now + timedelta(hours=1, minutes=30))

    assert status.state == EntryState.OPEN
    assert status.working_time == "01:30:00"
    assert status.working_hours == 1.5


def test_today_status_without_entry(entries_repo, fixed_now):
    svc = TimesheetService(entries_repo, clock=lambda: fixed_now)

    status = svc.today_status("EMP001")

    assert status.state == EntryState.NONE
    assert status.entry is None
    assert status.working_time == "00:00:00"


def test_service_uses_injected_clock(entries_repo):
    now = datetime(2026, 3, 6, 7, 45)
    svc = TimesheetService(entries_repo, clock=lambda: now)

    entry = svc.clock_in("EMP001", "John Doe")

    assert entry.work_date == now.date()
    assert entry.clock_in_time == now


def _to_whole_second(value):
    if value is None:
        return None
    return (value + timedelta(microseconds=500_000)).replace(microsecond=0)


class WholeSecondRepo(InMemoryTimeEntries):
    """Stores timestamps the way a MySQL DATETIME column does (rounded)."""

    def insert_entry(self, entry):
        return super().insert_entry(replace(entry, clock_in_time=_to_whole_second(entry.clock_in_time)))

    def update_entry(self, entry_id, patch, *, expected_status=None):
        patch = dict(patch)
        if "clock_out_time" in patch:
            patch["clock_out_time"] = _to_whole_second(patch["clock_out_time"])
        return super().update_entry(entry_id, patch, expected_status=expected_status)


def test_stored_hours_match_stored_timestamps():
    repo = WholeSecondRepo()
    svc = TimesheetService(repo)
    svc.clock_in("EMP001", "John Doe", now=datetime(2026, 3, 4, 9, 0, 0, 600_000))

    svc.clock_out("EMP001", now=datetime(2026, 3, 4, 17, 30, 0, 200_000))

    stored = repo.find_entry("EMP001", date(2026, 3, 4))
    assert stored.total_hours == elapsed_hours(stored.clock_in_time, stored.clock_out_time)
    assert stored.total_hours == 8.5


def test_clock_out_within_same_second_is_accepted():
    repo = WholeSecondRepo()
    svc = TimesheetService(repo)
    svc.clock_in("EMP001", "John Doe", now=datetime(2026, 3, 4, 9, 0, 0, 600_000))

    closed = svc.clock_out("EMP001", now=datetime(2026, 3, 4, 9, 0, 0, 900_000))

    assert closed.status == EntryStatus.CLOCKED_OUT
    assert closed.total_hours == 0.0


def test_clock_out_entry_left_open_on_earlier_day(fixed_now):
    yesterday = fixed_now.date() - timedelta(days=1)
    repo = InMemoryTimeEntries([make_entry(work_date=yesterday)])
    svc = TimesheetService(repo)

    with pytest.raises(NotClockedInError):
        svc.clock_out("EMP001", now=fixed_now)

    closed = svc.clock_out("EMP001", now=fixed_now, work_date=yesterday)

    assert closed.work_date == yesterday
    assert closed.total_hours == 24.0
    assert repo.find_entry("EMP001", yesterday).status == EntryStatus.CLOCKED_OUT
