"""Fold time entries into per-employee summaries and dashboard totals."""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import EntryStatus
from ..timesheets.model import TimeEntry
from .model import EmployeeRef, TimesheetSummary, TimesheetTotals


def summarize(entries: Iterable[TimeEntry], employee_id: Optional[str] = None) -> list[TimesheetSummary]:
    """Per-employee totals, in the order employees are first seen.

    Entries without ``total_hours`` (still open) add nothing to the total and
    do not count as a day worked.
    """
    groups: dict[str, dict] = {}

    for e in entries:
        if employee_id is not None and e.employee_id != employee_id:
            continue

        g = groups.get(e.employee_id)
        if not g:
            g = {"employee_name": e.employee_name, "total_hours": 0.0, "days_worked": 0}
            groups[e.employee_id] = g

        if e.total_hours is not None:
            g["total_hours"] += e.total_hours
            g["days_worked"] += 1

    return [
        TimesheetSummary(
            employee_id=emp_id,
            employee_name=g["employee_name"],
            total_hours=g["total_hours"],
            days_worked=g["days_worked"],
            avg_hours_per_day=g["total_hours"] / g["days_worked"] if g["days_worked"] > 0 else 0.0,
        )
        for emp_id, g in groups.items()
    ]


def compute_totals(
    summaries: Sequence[TimesheetSummary],
    *,
    entries: Iterable[TimeEntry] = (),
    today: Optional[date] = None,
) -> TimesheetTotals:
    """Dashboard rollups across employees.

    ``avg_hours_per_day`` is the plain mean of each employee's average, not
    total hours over total days. Reported figures depend on this; keep it.
    """
    active_today = 0
    if today is not None:
        active_today = sum(1 for e in entries if e.work_date == today and e.status == EntryStatus.CLOCKED_IN)

    if not summaries:
        return TimesheetTotals(total_employees=0, total_hours=0.0, avg_hours_per_day=0.0, active_today=active_today)

    return TimesheetTotals(
        total_employees=len({s.employee_id for s in summaries}),
        total_hours=sum(s.total_hours for s in summaries),
        avg_hours_per_day=sum(s.avg_hours_per_day for s in summaries) / len(summaries),
        active_today=active_today,
    )


def distinct_employees(entries: Iterable[TimeEntry]) -> list[EmployeeRef]:
    seen: dict[str, EmployeeRef] = {}
    for e in entries:
        if e.employee_id not in seen:
            seen[e.employee_id] = EmployeeRef(employee_id=e.employee_id, employee_name=e.employee_name)
    return list(seen.values())
