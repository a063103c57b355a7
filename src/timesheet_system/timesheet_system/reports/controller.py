from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_optional_date
from ..common.http import error_response, login_required
from ..core.enums import Period
from ..core.exceptions import DomainError, InvalidDateRangeError
from ..container import Container
from ..timesheets.controller import serialize_entry
from .service import ExportFile, TimesheetReport


def _report_from_args(container: Container) -> TimesheetReport:
    args = request.args
    try:
        start = parse_optional_date(args.get("start"))
        end = parse_optional_date(args.get("end"))
    except ValueError as e:
        raise InvalidDateRangeError(f"Dates must be YYYY-MM-DD: {e}") from e

    period = args.get("period", Period.WEEK.value)
    # Explicit dates override the named period.
    if start is not None or end is not None:
        period = Period.CUSTOM

    employee_id = args.get("employee_id") or None
    if employee_id == "all":
        employee_id = None

    return container.report_service.build_report(period, start=start, end=end, employee_id=employee_id)


def _download(export: ExportFile):
    return send_file(
        io.BytesIO(export.content),
        mimetype=export.mimetype,
        as_attachment=True,
        download_name=export.filename,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timesheets", methods=["GET"], endpoint="timesheets")
    @login_required
    def timesheets():
        try:
            report = _report_from_args(container)
        except DomainError as e:
            return error_response(e)

        totals = report.totals
        return jsonify(
            {
                "success": True,
                "period": report.date_range.label,
                "start": report.date_range.start.isoformat(),
                "end": report.date_range.end.isoformat(),
                "totals": {
                    "total_employees": totals.total_employees,
                    "total_hours": totals.total_hours,
                    "avg_hours_per_day": totals.avg_hours_per_day,
                    "active_today": totals.active_today,
                },
                "summaries": [
                    {
                        "employee_id": s.employee_id,
                        "employee_name": s.employee_name,
                        "total_hours": s.total_hours,
                        "days_worked": s.days_worked,
                        "avg_hours_per_day": s.avg_hours_per_day,
                    }
                    for s in report.summaries
                ],
                "employees": [{"id": e.employee_id, "name": e.employee_name} for e in report.employees],
                "entries": [serialize_entry(e) for e in report.entries],
            }
        )

    @app.route("/api/timesheets.csv", methods=["GET"], endpoint="timesheets_csv")
    @login_required
    def timesheets_csv():
        try:
            report = _report_from_args(container)
            export = container.report_service.export_csv(report)
        except DomainError as e:
            return error_response(e)
        return _download(export)

    @app.route("/api/timesheets.xlsx", methods=["GET"], endpoint="timesheets_xlsx")
    @login_required
    def timesheets_xlsx():
        try:
            report = _report_from_args(container)
            export = container.report_service.export_xlsx(report)
        except DomainError as e:
            return error_response(e)
        return _download(export)
