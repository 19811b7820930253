from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import normalize_email, optional_text, require_non_empty
from ..core.enums import EmployeeState
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage the employee directory (HR)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, *, include_inactive: bool = False) -> Sequence[Employee]:
        return self._employees.list_all(include_inactive=include_inactive)

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_by_telegram_id(self, telegram_id: str) -> Employee:
        telegram_id = str(telegram_id or "").strip()
        employee = self._employees.get_by_telegram_id(telegram_id) if telegram_id else None
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        telegram_id: Optional[str],
        telegram_username: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
        is_hr: bool = False,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = normalize_email(email)
        telegram_id = require_non_empty(None if telegram_id is None else str(telegram_id), "Telegram ID")

        if self._employees.find_conflicting(email=email, telegram_id=telegram_id):
            raise ConflictError("Employee with this email or Telegram ID already exists")

        employee = self._employees.create(
            name=name,
            email=email,
            telegram_id=telegram_id,
            telegram_username=optional_text(telegram_username),
            department=optional_text(department),
            position=optional_text(position),
            is_hr=bool(is_hr),
        )
        logger.info("Created employee id=%s telegram_id=%s", employee.employee_id, employee.telegram_id)
        return employee

    def update(self, employee_id: int, data: Mapping[str, Any]) -> Employee:
        """Apply a partial update.

        ``data`` uses the API field names. Identity fields (name, email,
        telegramId) change only when a non-empty value is sent; the other
        fields change whenever the key is present, so they can be cleared.
        """
        employee = self.get(employee_id)

        fields: dict[str, Any] = {}
        if data.get("name"):
            fields["name"] = require_non_empty(data["name"], "Name")
        if data.get("email"):
            fields["email"] = normalize_email(data["email"])
        if data.get("telegramId"):
            fields["telegram_id"] = str(data["telegramId"]).strip()
        for key, column in (
            ("telegramUsername", "telegram_username"),
            ("department", "department"),
            ("position", "position"),
        ):
            if key in data:
                fields[column] = optional_text(data[key])
        if "isHR" in data and data["isHR"] is not None:
            fields["is_hr"] = _as_flag(data["isHR"], "isHR")
        if "isActive" in data and data["isActive"] is not None:
            active = _as_flag(data["isActive"], "isActive")
            fields["state"] = EmployeeState.ACTIVE if active else EmployeeState.INACTIVE

        new_email = fields.get("email")
        new_telegram = fields.get("telegram_id")
        if (new_email and new_email != employee.email) or (new_telegram and new_telegram != employee.telegram_id):
            clash = self._employees.find_conflicting(
                email=new_email,
                telegram_id=new_telegram,
                exclude_id=employee.employee_id,
            )
            if clash:
                raise ConflictError("Email or Telegram ID already in use")

        updated = self._employees.update(employee.employee_id, fields)
        if not updated:
            raise NotFoundError("Employee not found")
        logger.info("Updated employee id=%s fields=%s", employee.employee_id, sorted(fields))
        return updated

    def deactivate(self, employee_id: int) -> Employee:
        employee = self.get(employee_id)
        updated = self._employees.update(employee.employee_id, {"state": EmployeeState.INACTIVE})
        if not updated:
            raise NotFoundError("Employee not found")
        logger.info("Deactivated employee id=%s", employee.employee_id)
        return updated


def _as_flag(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false", "1", "0"}:
        return value.lower() in {"true", "1"}
    if isinstance(value, int):
        return bool(value)
    raise ValidationError(f"{field_name} must be a boolean")
