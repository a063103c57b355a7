from __future__ import annotations

from enum import Enum


class EntryStatus(str, Enum):
    """Stored status of a time entry."""

    CLOCKED_IN = "clocked_in"
    CLOCKED_OUT = "clocked_out"


class EntryState(str, Enum):
    """State machine view of an employee's day.

    NONE has no stored counterpart: it means no entry exists yet.
    """

    NONE = "none"
    OPEN = "open"
    CLOSED = "closed"


class Period(str, Enum):
    """Named report period selectors."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"
