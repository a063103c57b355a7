from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import current_identity, error_response, login_required
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import TimeEntry


def serialize_entry(entry: TimeEntry) -> dict[str, Any]:
    return {
        "id": entry.entry_id,
        "employee_id": entry.employee_id,
        "employee_name": entry.employee_name,
        "date": entry.work_date.isoformat(),
        "clock_in_time": entry.clock_in_time.isoformat(),
        "clock_out_time": entry.clock_out_time.isoformat() if entry.clock_out_time else None,
        "total_hours": entry.total_hours,
        "status": entry.status.value,
        "notes": entry.notes,
    }


def _json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _work_date(raw: Any) -> Optional[date]:
    if raw is not None and not isinstance(raw, str):
        raise ValidationError("date must be a YYYY-MM-DD string")
    try:
        return parse_optional_date(raw)
    except ValueError as e:
        raise ValidationError(f"invalid date: {raw}") from e


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        employee_id, employee_name = current_identity()
        payload = _json_body()
        try:
            entry = container.timesheet_service.clock_in(employee_id, employee_name, notes=payload.get("notes"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "entry": serialize_entry(entry)}), 201

    @app.route("/api/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        employee_id, _ = current_identity()
        try:
            # Optional "date" closes an entry left open on an earlier day.
            work_date = _work_date(_json_body().get("date"))
            entry = container.timesheet_service.clock_out(employee_id, work_date=work_date)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "entry": serialize_entry(entry)}), 200

    @app.route("/api/clock/today", methods=["GET"], endpoint="clock_today")
    @login_required
    def clock_today():
        """Today's entry and live working time; clients poll this to refresh."""
        employee_id, _ = current_identity()
        try:
            status = container.timesheet_service.today_status(employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "date": status.work_date.isoformat(),
                "state": status.state.value,
                "working_time": status.working_time,
                "working_hours": round(status.working_hours, 4),
                "entry": serialize_entry(status.entry) if status.entry else None,
            }
        )
