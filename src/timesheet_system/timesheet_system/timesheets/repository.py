from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import EntryStatus
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    """Storage for the flat time entry table.

    Implementations own the (employee_id, work_date) uniqueness guarantee and
    raise ``DuplicateKeyError`` when an insert would break it.
    """

    def find_entry(self, employee_id: str, work_date: date) -> Optional[TimeEntry]:
        raise NotImplementedError

    def insert_entry(self, entry: TimeEntry) -> TimeEntry:
        raise NotImplementedError

    def update_entry(
        self,
        entry_id: str,
        patch: Mapping[str, Any],
        *,
        expected_status: Optional[EntryStatus] = None,
    ) -> TimeEntry:
        """Apply ``patch`` and return the stored entry.

        Raises ``NotFoundError`` when no entry matches ``entry_id`` (and
        ``expected_status``, when given).
        """

        raise NotImplementedError

    def query_entries(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[TimeEntry]:
        """Entries in the inclusive range, newest date first, then by name."""

        raise NotImplementedError
