"""Example: use the service layer directly (no Flask).

Prints this week's per-employee summary.
"""

import importlib

from config import get_settings_module

from src.timesheet_system.timesheet_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    report = container.report_service.build_report("week")
    print(f"{report.date_range.start} .. {report.date_range.end}")
    for s in report.summaries:
        print(f"{s.employee_name:<24} {s.total_hours:>7.2f}h {s.days_worked:>3}d {s.avg_hours_per_day:>6.2f}h/d")


if __name__ == "__main__":
    main()
