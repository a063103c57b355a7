from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import EntryStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    entry_id, employee_id, employee_name, work_date, clock_in_time, clock_out_time,
    total_hours, status, notes, created_at, updated_at
"""

# Columns a patch may touch; the natural key and id are immutable.
_PATCHABLE = ("clock_out_time", "total_hours", "status", "notes")


def _to_entry(r: Mapping[str, Any]) -> TimeEntry:
    total_hours = r.get("total_hours")
    return TimeEntry(
        entry_id=str(r["entry_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r["employee_name"],
        work_date=r["work_date"],
        clock_in_time=r["clock_in_time"],
        clock_out_time=r.get("clock_out_time"),
        status=EntryStatus(r["status"]),
        total_hours=float(total_hours) if total_hours is not None else None,
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_entry(self, employee_id: str, work_date: date) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s AND work_date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def _get_by_id(self, cur, entry_id: str) -> Optional[TimeEntry]:
        cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s", (entry_id,))
        r = fetchone(cur)
        return _to_entry(r) if r else None

    def insert_entry(self, entry: TimeEntry) -> TimeEntry:
        # A duplicate (employee_id, work_date) hits the unique key and surfaces
        # from db_cursor as DuplicateKeyError.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(
                    entry_id, employee_id, employee_name, work_date,
                    clock_in_time, clock_out_time, total_hours, status, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.entry_id,
                    entry.employee_id,
                    entry.employee_name,
                    entry.work_date,
                    entry.clock_in_time,
                    entry.clock_out_time,
                    entry.total_hours,
                    entry.status.value,
                    entry.notes,
                ),
            )
            stored = self._get_by_id(cur, entry.entry_id)
        logger.debug("Inserted time entry %s", entry.entry_id)
        return stored or entry

    def update_entry(
        self,
        entry_id: str,
        patch: Mapping[str, Any],
        *,
        expected_status: Optional[EntryStatus] = None,
    ) -> TimeEntry:
        unknown = set(patch) - set(_PATCHABLE)
        if unknown:
            raise ValueError(f"Unsupported patch fields: {sorted(unknown)}")

        assignments: list[str] = []
        params: list[object] = []
        for column in _PATCHABLE:
            if column in patch:
                value = patch[column]
                assignments.append(f"{column}=%s")
                params.append(value.value if isinstance(value, EntryStatus) else value)

        clauses = ["entry_id=%s"]
        params.append(entry_id)
        if expected_status is not None:
            clauses.append("status=%s")
            params.append(expected_status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            if assignments:
                cur.execute(
                    f"""
                    UPDATE time_entries
                    SET {", ".join(assignments)}
                    WHERE {" AND ".join(clauses)}
                    """,
                    tuple(params),
                )
                # rowcount is 0 for unchanged rows too, so confirm by reading back.
                matched = cur.rowcount > 0
            else:
                matched = False
            stored = self._get_by_id(cur, entry_id)

        if stored is None:
            raise NotFoundError(f"time entry {entry_id} not found")
        if not matched and expected_status is not None and stored.status != expected_status:
            raise NotFoundError(f"time entry {entry_id} is not {expected_status.value}")
        return stored

    def query_entries(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[TimeEntry]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE {where}
                ORDER BY work_date DESC, employee_name ASC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]
