from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class TimeEntry:
    """One side of a day's record (check-in or check-out) with its correction audit."""

    time: Optional[datetime] = None
    modified_by: Optional[int] = None
    original_time: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    def to_dict(self, modified_by_name: Optional[str] = None) -> dict:
        modified_by: object = self.modified_by
        if self.modified_by is not None and modified_by_name is not None:
            modified_by = {"id": self.modified_by, "name": modified_by_name}
        return {
            "time": isoformat_or_none(self.time),
            "modifiedBy": modified_by,
            "originalTime": isoformat_or_none(self.original_time),
            "modifiedAt": isoformat_or_none(self.modified_at),
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: TimeEntry = field(default_factory=TimeEntry)
    check_out: TimeEntry = field(default_factory=TimeEntry)
    total_hours: float = 0.0
    status: AttendanceStatus = AttendanceStatus.PENDING
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee": self.employee_id,
            "date": self.work_date.isoformat(),
            "checkIn": self.check_in.to_dict(),
            "checkOut": self.check_out.to_dict(),
            "totalHours": self.total_hours,
            "status": self.status.value,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceView:
    """Read-model for listings: record joined with its employee and correctors' names."""

    record: AttendanceRecord
    employee: Optional[Employee] = None
    check_in_modified_by_name: Optional[str] = None
    check_out_modified_by_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        if self.employee is not None:
            out["employee"] = self.employee.summary()
        out["checkIn"] = self.record.check_in.to_dict(self.check_in_modified_by_name)
        out["checkOut"] = self.record.check_out.to_dict(self.check_out_modified_by_name)
        return out


@dataclass(frozen=True)
class Correction:
    """HR correction payload; ``None`` leaves the field untouched."""

    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None
