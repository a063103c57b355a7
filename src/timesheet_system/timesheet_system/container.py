from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_WEEK_START
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import TimesheetReportService
from .timesheets.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timesheets.repository import TimeEntryRepository
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    entries_repo: TimeEntryRepository

    timesheet_service: TimesheetService
    report_service: TimesheetReportService


def build_services(
    entries_repo: TimeEntryRepository,
    *,
    week_start: int = DEFAULT_WEEK_START,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        conn=conn,
        entries_repo=entries_repo,
        timesheet_service=TimesheetService(entries_repo),
        report_service=TimesheetReportService(entries_repo, week_start=week_start),
    )


def build_container(*, db_config: dict, week_start: int = DEFAULT_WEEK_START) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(MySQLTimeEntryRepository(conn), week_start=week_start, conn=conn)
