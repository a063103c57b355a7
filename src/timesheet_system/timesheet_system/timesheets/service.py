from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import EntryState, EntryStatus
from ..core.exceptions import DuplicateClockInError, DuplicateKeyError, NotClockedInError, NotFoundError
from . import state_machine
from .duration import live_duration, live_duration_hms
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockStatus:
    """Today's clock state for one employee, with the live working time."""

    employee_id: str
    work_date: date
    state: EntryState
    entry: Optional[TimeEntry]
    working_hours: float
    working_time: str


class TimesheetService:
    """Use cases: clock in, clock out, today's status.

    Identity is always passed in explicitly by the caller.
    """

    def __init__(self, entries: TimeEntryRepository, *, clock: Callable[[], datetime] = now_local):
        self._entries = entries
        self._clock = clock

    def _now(self, now: datetime | None) -> datetime:
        # Stored timestamps keep whole seconds only.
        return (now or self._clock()).replace(microsecond=0)

    def clock_in(
        self,
        employee_id: str,
        employee_name: str,
        *,
        now: datetime | None = None,
        notes: Optional[str] = None,
    ) -> TimeEntry:
        now = self._now(now)
        today = now.date()

        current = self._entries.find_entry(employee_id, today)
        entry = state_machine.clock_in(employee_id, employee_name, today, now, current=current, notes=notes)

        try:
            stored = self._entries.insert_entry(entry)
        except DuplicateKeyError as e:
            # Lost a race with a concurrent clock-in for the same day.
            raise DuplicateClockInError(f"{employee_id} already clocked in on {today.isoformat()}") from e

        logger.info("Clocked IN - %s (%s) at %s", employee_name, employee_id, now.isoformat())
        return stored

    def clock_out(
        self,
        employee_id: str,
        *,
        now: datetime | None = None,
        work_date: date | None = None,
    ) -> TimeEntry:
        """Close the open entry for ``work_date`` (default: today).

        Passing an earlier ``work_date`` closes an entry that was left open on a
        previous day; its hours then run up to ``now``.
        """
        now = self._now(now)
        work_date = work_date or now.date()

        current = self._entries.find_entry(employee_id, work_date)
        closed = state_machine.clock_out(current, now)

        try:
            stored = self._entries.update_entry(
                closed.entry_id,
                {
                    "clock_out_time": closed.clock_out_time,
                    "total_hours": closed.total_hours,
                    "status": closed.status,
                },
                expected_status=EntryStatus.CLOCKED_IN,
            )
        except NotFoundError as e:
            # Closed by someone else between our read and write.
            raise NotClockedInError(f"{employee_id} is not clocked in") from e

        logger.info(
            "Clocked OUT - %s (%s) at %s, %.2f h",
            closed.employee_name,
            employee_id,
            now.isoformat(),
            closed.total_hours,
        )
        return stored

    def today_status(self, employee_id: str, *, now: datetime | None = None) -> ClockStatus:
        now = now or self._clock()
        entry = self._entries.find_entry(employee_id, now.date())
        if entry is None:
            return ClockStatus(
                employee_id=employee_id,
                work_date=now.date(),
                state=EntryState.NONE,
                entry=None,
                working_hours=0.0,
                working_time="00:00:00",
            )
        return ClockStatus(
            employee_id=employee_id,
            work_date=entry.work_date,
            state=entry.state,
            entry=entry,
            working_hours=live_duration(entry, now),
            working_time=live_duration_hms(entry, now),
        )
