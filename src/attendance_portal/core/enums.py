from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Actor roles used for authorization."""

    ADMIN = "admin"
    HR = "hr"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Status label stored on a day's attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
    PENDING = "pending"


class EmployeeState(str, Enum):
    """Directory lifecycle: inactive employees are hidden from listings but kept for history."""

    ACTIVE = "active"
    INACTIVE = "inactive"
