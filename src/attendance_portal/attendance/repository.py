from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceView


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Insert the day's record.

        Must raise ``ConflictError`` when a record for (employee, day) already
        exists; the storage's unique key is the only guard against two
        concurrent first check-ins.
        """
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> bool:
        """Persist every mutable column of ``record``."""
        raise NotImplementedError

    def list_views(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceView]:
        """Records with ``start_date <= work_date <= end_date``, newest day first."""
        raise NotImplementedError

    def get_view(self, attendance_id: int) -> Optional[AttendanceView]:
        raise NotImplementedError

    def count_checked_in(self, work_date: date, *, after: Optional[datetime] = None) -> int:
        """Records of ``work_date`` with a check-in (strictly later than ``after`` when given)."""
        raise NotImplementedError

    def hours_between(self, start: date, end_exclusive: date) -> Sequence[float]:
        """Non-zero ``total_hours`` of records with ``start <= work_date < end_exclusive``."""
        raise NotImplementedError
