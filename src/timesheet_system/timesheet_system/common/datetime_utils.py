from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(value.strip())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_hms(total_seconds: int) -> str:
    """Format whole seconds as HH:MM:SS (hours are not capped at 24)."""
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def whole_seconds(delta: timedelta) -> int:
    # Truncate, never round, sub-second remainders.
    return delta.days * 86400 + delta.seconds
