from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window a report covers."""

    start: date
    end: date
    label: str = "custom"


@dataclass(frozen=True)
class TimesheetSummary:
    """Read-model: one employee's rollup over a date window."""

    employee_id: str
    employee_name: str
    total_hours: float
    days_worked: int
    avg_hours_per_day: float


@dataclass(frozen=True)
class TimesheetTotals:
    total_employees: int
    total_hours: float
    avg_hours_per_day: float
    active_today: int = 0


@dataclass(frozen=True)
class EmployeeRef:
    employee_id: str
    employee_name: str
