from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Callable, Optional, Union

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import Period
from ..timesheets.model import TimeEntry
from ..timesheets.repository import TimeEntryRepository
from .aggregator import compute_totals, distinct_employees, summarize
from .export import export_filename, to_csv, to_xlsx
from .model import DateRange, EmployeeRef, TimesheetSummary, TimesheetTotals
from .periods import resolve_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimesheetReport:
    date_range: DateRange
    entries: list[TimeEntry]
    summaries: list[TimesheetSummary]
    totals: TimesheetTotals
    employees: list[EmployeeRef]


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str


class TimesheetReportService:
    def __init__(
        self,
        entries: TimeEntryRepository,
        *,
        week_start: int = DEFAULT_WEEK_START,
        today: Callable[[], date] = lambda: now_local().date(),
        tz: Optional[tzinfo] = None,
    ):
        self._entries = entries
        self._week_start = int(week_start)
        self._today = today
        self._tz = tz

    def resolve(
        self,
        period: Union[Period, str] = Period.WEEK,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> DateRange:
        return resolve_period(period, today or self._today(), week_start=self._week_start, start=start, end=end)

    def build_report(
        self,
        period: Union[Period, str] = Period.WEEK,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> TimesheetReport:
        today = today or self._today()
        date_range = self.resolve(period, start=start, end=end, today=today)

        # Fetch everyone in range so the employee picker stays complete, then
        # narrow to the selected employee.
        all_entries = list(self._entries.query_entries(start_date=date_range.start, end_date=date_range.end))
        entries = [e for e in all_entries if employee_id is None or e.employee_id == employee_id]

        summaries = summarize(entries)
        summaries.sort(key=lambda s: (s.employee_name, s.employee_id))
        totals = compute_totals(summaries, entries=entries, today=today)

        logger.debug(
            "Report %s..%s employee=%s: %d entries, %d employees",
            date_range.start,
            date_range.end,
            employee_id,
            len(entries),
            totals.total_employees,
        )
        return TimesheetReport(
            date_range=date_range,
            entries=entries,
            summaries=summaries,
            totals=totals,
            employees=distinct_employees(all_entries),
        )

    def export_csv(self, report: TimesheetReport) -> ExportFile:
        return ExportFile(
            filename=export_filename(report.date_range, "csv"),
            content=to_csv(report.entries, tz=self._tz).encode("utf-8-sig"),
            mimetype="text/csv",
        )

    def export_xlsx(self, report: TimesheetReport) -> ExportFile:
        return ExportFile(
            filename=export_filename(report.date_range, "xlsx"),
            content=to_xlsx(report.entries, tz=self._tz),
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
