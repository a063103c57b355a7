from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EntryState, EntryStatus
from ..core.exceptions import InvalidTimeOrderError, ValidationError


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one employee's clock record for one calendar date.

    ``employee_name`` is a denormalized copy taken at clock-in. Renaming an
    employee does not rewrite past entries; reports show the name as it was
    recorded.
    """

    entry_id: str
    employee_id: str
    employee_name: str
    work_date: date
    clock_in_time: datetime
    clock_out_time: Optional[datetime]
    status: EntryStatus
    total_hours: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if (self.status == EntryStatus.CLOCKED_IN) != (self.clock_out_time is None):
            raise ValidationError(
                f"entry {self.entry_id}: status {self.status.value} does not match clock_out_time={self.clock_out_time}"
            )
        if self.clock_out_time is not None and self.clock_out_time < self.clock_in_time:
            raise InvalidTimeOrderError(
                f"entry {self.entry_id}: clock-out {self.clock_out_time.isoformat()} precedes clock-in "
                f"{self.clock_in_time.isoformat()}"
            )

    @property
    def is_open(self) -> bool:
        return self.status == EntryStatus.CLOCKED_IN

    @property
    def state(self) -> EntryState:
        return EntryState.OPEN if self.is_open else EntryState.CLOSED
