from __future__ import annotations

import csv
import io
from datetime import datetime, tzinfo
from typing import Iterable, Optional

import pandas as pd

from ..core.constants import CSV_HEADER, EXCEL_SHEET_NAME, EXPORT_FILENAME_TEMPLATE
from ..timesheets.model import TimeEntry
from .model import DateRange


def _fmt_time(value: Optional[datetime], tz: Optional[tzinfo]) -> str:
    if value is None:
        return ""
    if value.tzinfo is not None:
        # astimezone(None) converts to the host's local zone.
        value = value.astimezone(tz)
    return value.strftime("%H:%M:%S")


def _fmt_hours(value: Optional[float]) -> str:
    return "" if value is None else f"{value:.2f}"


def export_rows(entries: Iterable[TimeEntry], *, tz: Optional[tzinfo] = None) -> list[list[str]]:
    return [
        [
            e.employee_id,
            e.employee_name,
            e.work_date.isoformat(),
            _fmt_time(e.clock_in_time, tz),
            _fmt_time(e.clock_out_time, tz),
            _fmt_hours(e.total_hours),
            e.status.value,
        ]
        for e in entries
    ]


def to_csv(entries: Iterable[TimeEntry], *, tz: Optional[tzinfo] = None) -> str:
    """Serialize entries as CSV text, one row per entry under a fixed header.

    Fields are quoted only when they contain a comma, quote or newline, so
    ordinary data comes out as a plain comma join.
    """
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(export_rows(entries, tz=tz))
    return out.getvalue()


def to_xlsx(entries: Iterable[TimeEntry], *, tz: Optional[tzinfo] = None) -> bytes:
    df = pd.DataFrame(export_rows(entries, tz=tz), columns=list(CSV_HEADER))
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=EXCEL_SHEET_NAME)
    return output.getvalue()


def export_filename(date_range: DateRange, ext: str = "csv") -> str:
    return EXPORT_FILENAME_TEMPLATE.format(
        start=date_range.start.isoformat(),
        end=date_range.end.isoformat(),
        ext=ext,
    )
