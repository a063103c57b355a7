from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.timesheet_system.timesheet_system.core.enums import EntryStatus
from src.timesheet_system.timesheet_system.core.exceptions import DuplicateKeyError, NotFoundError
from src.timesheet_system.timesheet_system.timesheets.model import TimeEntry


class InMemoryTimeEntries:
    def __init__(self, entries=()):
        self._by_id: dict[str, TimeEntry] = {}
        self.inserts = 0
        self.updates = 0
        for e in entries:
            self._by_id[e.entry_id] = e

    def all(self) -> list[TimeEntry]:
        return list(self._by_id.values())

    def find_entry(self, employee_id: str, work_date: date) -> Optional[TimeEntry]:
        for e in self._by_id.values():
            if e.employee_id == employee_id and e.work_date == work_date:
                return e
        return None

    def insert_entry(self, entry: TimeEntry) -> TimeEntry:
        if self.find_entry(entry.employee_id, entry.work_date) is not None:
            raise DuplicateKeyError(f"{entry.employee_id}/{entry.work_date}")
        self.inserts += 1
        self._by_id[entry.entry_id] = entry
        return entry

    def update_entry(self, entry_id: str, patch, *, expected_status=None) -> TimeEntry:
        current = self._by_id.get(entry_id)
        if current is None or (expected_status is not None and current.status != expected_status):
            raise NotFoundError(entry_id)
        self.updates += 1
        updated = replace(current, **dict(patch))
        self._by_id[entry_id] = updated
        return updated

    def query_entries(self, *, start_date: date, end_date: date, employee_id=None):
        items = [
            e
            for e in self._by_id.values()
            if start_date <= e.work_date <= end_date and (employee_id is None or e.employee_id == employee_id)
        ]
        items.sort(key=lambda e: e.employee_name)
        items.sort(key=lambda e: e.work_date, reverse=True)
        return items


def make_entry(
    employee_id: str = "EMP001",
    employee_name: str = "John Doe",
    work_date: date = date(2026, 3, 4),
    *,
    clock_in: Optional[datetime] = None,
    clock_out: Optional[datetime] = None,
    total_hours: Optional[float] = None,
    entry_id: Optional[str] = None,
) -> TimeEntry:
    clock_in = clock_in or datetime.combine(work_date, datetime.min.time()).replace(hour=9)
    return TimeEntry(
        entry_id=entry_id or f"{employee_id}-{work_date.isoformat()}",
        employee_id=employee_id,
        employee_name=employee_name,
        work_date=work_date,
        clock_in_time=clock_in,
        clock_out_time=clock_out,
        status=EntryStatus.CLOCKED_OUT if clock_out else EntryStatus.CLOCKED_IN,
        total_hours=total_hours,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 3, 4, 9, 0, 0)


@pytest.fixture
def entries_repo() -> InMemoryTimeEntries:
    return InMemoryTimeEntries()
