from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import EmployeeState

# Columns an HR actor may change through a partial update.
UPDATABLE_FIELDS = (
    "name",
    "email",
    "telegram_id",
    "telegram_username",
    "department",
    "position",
    "is_hr",
    "state",
)


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee registered in the directory.

    Employees are identified by email and Telegram id, both unique across
    active and inactive records. Deactivation only flips ``state``.
    """

    employee_id: int
    name: str
    email: str
    telegram_id: str
    telegram_username: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    is_hr: bool = False
    state: EmployeeState = EmployeeState.ACTIVE
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.state == EmployeeState.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "telegramId": self.telegram_id,
            "telegramUsername": self.telegram_username,
            "department": self.department,
            "position": self.position,
            "isHR": self.is_hr,
            "isActive": self.is_active,
            "state": self.state.value,
            "createdAt": isoformat_or_none(self.created_at),
        }

    def summary(self) -> dict:
        """Subset embedded in attendance listings."""
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "telegramId": self.telegram_id,
            "department": self.department,
            "position": self.position,
        }
