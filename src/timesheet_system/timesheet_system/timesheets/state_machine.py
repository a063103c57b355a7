"""Clock-in/clock-out transitions for a single employee day.

NONE -> OPEN (clock in) -> CLOSED (clock out). There is no way back from
CLOSED: one entry per employee per day.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import EntryState, EntryStatus
from ..core.exceptions import DuplicateClockInError, InvalidTimeOrderError, NotClockedInError
from .duration import elapsed_hours
from .model import TimeEntry


def entry_state(entry: Optional[TimeEntry]) -> EntryState:
    if entry is None:
        return EntryState.NONE
    return entry.state


def clock_in(
    employee_id: str,
    employee_name: str,
    work_date: date,
    now: datetime,
    *,
    current: Optional[TimeEntry] = None,
    notes: Optional[str] = None,
) -> TimeEntry:
    """Open a new entry. ``current`` is the stored entry for that day, if any."""
    state = entry_state(current)
    if state is not EntryState.NONE:
        raise DuplicateClockInError(
            f"{employee_id} already has a {state.value} entry for {work_date.isoformat()}"
        )

    return TimeEntry(
        entry_id=str(uuid.uuid4()),
        employee_id=require_non_empty(employee_id, "employee_id"),
        employee_name=require_non_empty(employee_name, "employee_name"),
        work_date=work_date,
        clock_in_time=now,
        clock_out_time=None,
        status=EntryStatus.CLOCKED_IN,
        total_hours=None,
        notes=notes,
    )


def clock_out(entry: Optional[TimeEntry], now: datetime) -> TimeEntry:
    """Close an open entry, stamping clock-out time and worked hours."""
    if entry is None or entry_state(entry) is not EntryState.OPEN:
        raise NotClockedInError("no open entry to clock out of")
    if now < entry.clock_in_time:
        raise InvalidTimeOrderError(
            f"clock-out {now.isoformat()} precedes clock-in {entry.clock_in_time.isoformat()}"
        )

    return replace(
        entry,
        clock_out_time=now,
        status=EntryStatus.CLOCKED_OUT,
        total_hours=elapsed_hours(entry.clock_in_time, now),
    )
