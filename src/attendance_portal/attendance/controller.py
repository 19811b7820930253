from __future__ import annotations

from typing import Any, Optional

from flask import Flask, g, jsonify

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import json_body, make_auth_guards, make_bot_guard, query_date, query_int
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import Correction


def _entry_time(data: dict, key: str) -> Optional[Any]:
    entry = data.get(key)
    if not entry:
        return None
    if not isinstance(entry, dict):
        raise ValidationError(f"{key} must be an object with a 'time' field")
    raw = entry.get("time")
    if not raw:
        return None
    try:
        return parse_iso_datetime(str(raw))
    except ValueError:
        raise ValidationError(f"{key}.time must be an ISO-8601 timestamp")


def parse_correction(data: dict) -> Correction:
    status = None
    if data.get("status"):
        try:
            status = AttendanceStatus(data["status"])
        except ValueError:
            allowed = ", ".join(s.value for s in AttendanceStatus)
            raise ValidationError(f"status must be one of: {allowed}")

    # Any notes key overwrites, including null.
    notes = None
    if "notes" in data:
        notes = "" if data["notes"] is None else str(data["notes"])

    return Correction(
        check_in_time=_entry_time(data, "checkIn"),
        check_out_time=_entry_time(data, "checkOut"),
        status=status,
        notes=notes,
    )


def register(app: Flask, container: Container) -> None:
    _, hr_required = make_auth_guards(container.token_service)
    bot_endpoint = make_bot_guard(
        trust_telegram_id=bool(app.config.get("TRUST_TELEGRAM_ID", True)),
        bot_api_key=str(app.config.get("BOT_API_KEY") or ""),
    )
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @bot_endpoint
    def check_in():
        record = service.check_in(str(json_body().get("telegramId") or ""))
        return jsonify(record.to_dict())

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @bot_endpoint
    def check_out():
        record = service.check_out(str(json_body().get("telegramId") or ""))
        return jsonify(record.to_dict())

    @app.route("/api/attendance/today/<telegram_id>", methods=["GET"], endpoint="attendance_today")
    @bot_endpoint
    def today(telegram_id: str):
        employee, record = service.today_for(telegram_id)
        return jsonify({"employee": employee.to_dict(), "record": record.to_dict() if record else None})

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @hr_required
    def list_attendance():
        views = container.reporting_service.range_query(
            start_date=query_date("startDate"),
            end_date=query_date("endDate"),
            employee_id=query_int("employeeId"),
        )
        return jsonify([v.to_dict() for v in views])

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    @hr_required
    def get_attendance(attendance_id: int):
        return jsonify(container.reporting_service.get_record(attendance_id).to_dict())

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_correct")
    @hr_required
    def correct_attendance(attendance_id: int):
        record = service.correct(attendance_id, parse_correction(json_body()), actor_id=g.actor.user_id)
        return jsonify(record.to_dict())
