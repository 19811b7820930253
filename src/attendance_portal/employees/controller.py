from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, make_auth_guards, make_bot_guard, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, hr_required = make_auth_guards(container.token_service)
    bot_endpoint = make_bot_guard(
        trust_telegram_id=bool(app.config.get("TRUST_TELEGRAM_ID", True)),
        bot_api_key=str(app.config.get("BOT_API_KEY") or ""),
    )
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @hr_required
    def list_employees():
        include_inactive = request.args.get("includeInactive", "").lower() in {"1", "true", "yes"}
        employees = service.list_employees(include_inactive=include_inactive)
        return jsonify([e.to_dict() for e in employees])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @hr_required
    def get_employee(employee_id: int):
        return jsonify(service.get(employee_id).to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @hr_required
    def create_employee():
        data = json_body()
        employee = service.create(
            name=data.get("name"),
            email=data.get("email"),
            telegram_id=data.get("telegramId"),
            telegram_username=data.get("telegramUsername"),
            department=data.get("department"),
            position=data.get("position"),
            is_hr=bool(data.get("isHR") or False),
        )
        return jsonify(employee.to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @hr_required
    def update_employee(employee_id: int):
        return jsonify(service.update(employee_id, json_body()).to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_deactivate")
    @hr_required
    def deactivate_employee(employee_id: int):
        service.deactivate(employee_id)
        return jsonify({"message": "Employee deactivated"})

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="employees_attendance")
    @hr_required
    def employee_attendance(employee_id: int):
        employee = service.get(employee_id)
        views = container.reporting_service.range_query(
            start_date=query_date("startDate"),
            end_date=query_date("endDate"),
            employee_id=employee.employee_id,
        )
        return jsonify([v.to_dict() for v in views])

    @app.route("/api/employees/telegram/<telegram_id>", methods=["GET"], endpoint="employees_by_telegram")
    @bot_endpoint
    def employee_by_telegram(telegram_id: str):
        return jsonify(service.get_by_telegram_id(telegram_id).to_dict())
