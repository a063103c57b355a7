"""Write a timesheet export for a period to disk.

Usage: python scripts/export_timesheet.py --period month [--employee EMP001] [--xlsx]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timesheet_system.timesheet_system.common.datetime_utils import parse_optional_date
from src.timesheet_system.timesheet_system.container import build_container
from src.timesheet_system.timesheet_system.core.enums import Period


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--period", choices=[p.value for p in Period], default=Period.WEEK.value)
    parser.add_argument("--start", help="YYYY-MM-DD (custom period)")
    parser.add_argument("--end", help="YYYY-MM-DD (custom period)")
    parser.add_argument("--employee", help="Only this employee id")
    parser.add_argument("--xlsx", action="store_true", help="Write Excel instead of CSV")
    parser.add_argument("--out-dir", default=str(REPO_ROOT / "exports"))
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, week_start=getattr(settings, "WEEK_START", 0))

    service = container.report_service
    report = service.build_report(
        args.period,
        start=parse_optional_date(args.start),
        end=parse_optional_date(args.end),
        employee_id=args.employee,
    )
    export = service.export_xlsx(report) if args.xlsx else service.export_csv(report)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / export.filename
    target.write_bytes(export.content)
    print(f"OK: {len(report.entries)} entries, {report.totals.total_employees} employees -> {target}")


if __name__ == "__main__":
    main()
