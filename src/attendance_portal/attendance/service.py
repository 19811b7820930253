from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import HOURS_PRECISION
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, InvalidStateError, MissingCheckInError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, Correction, TimeEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def compute_total_hours(check_in: datetime, check_out: datetime) -> float:
    """Hours between the two timestamps, rounded half-up to two decimals."""
    seconds = Decimal(str((check_out - check_in).total_seconds()))
    hours = seconds / Decimal(3600)
    return float(hours.quantize(Decimal(1).scaleb(-HOURS_PRECISION), rounding=ROUND_HALF_UP))


def _to_second(value: datetime) -> datetime:
    # Time columns are DATETIME without fraction; MySQL would round instead.
    return value.replace(microsecond=0)


def _corrected(entry: TimeEntry, new_time: datetime, *, actor_id: int, now: datetime) -> TimeEntry:
    # The pre-correction value is captured once and never overwritten.
    original = entry.original_time
    if original is None and entry.time is not None:
        original = entry.time
    return TimeEntry(time=_to_second(new_time), modified_by=actor_id, original_time=original, modified_at=now)


class AttendanceService:
    """Check-in / check-out / HR correction rules for the attendance ledger."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _employee_for(self, telegram_id: str) -> Employee:
        telegram_id = str(telegram_id or "").strip()
        employee = self._employees.get_by_telegram_id(telegram_id) if telegram_id else None
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def check_in(self, telegram_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = _to_second(now or now_local())
        today = now.date()
        employee = self._employee_for(telegram_id)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if existing:
            if existing.check_in.time is not None:
                raise ConflictError("Already checked in today")

            record = replace(
                existing,
                check_in=replace(existing.check_in, time=now),
                status=AttendanceStatus.PRESENT,
            )
            self._attendance.save(record)
        else:
            record = self._attendance.create_checkin(
                employee_id=employee.employee_id,
                work_date=today,
                check_in_time=now,
                status=AttendanceStatus.PRESENT,
            )

        logger.info("Check-in employee=%s at %s", employee.employee_id, now.isoformat())
        return record

    def check_out(self, telegram_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = _to_second(now or now_local())
        employee = self._employee_for(telegram_id)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        if not record:
            raise MissingCheckInError("No check-in record found for today")
        if record.check_in.time is None:
            raise InvalidStateError("Must check in before checking out")
        if record.check_out.time is not None:
            raise ConflictError("Already checked out today")
        if now < record.check_in.time:
            # An HR correction may have moved check-in past the current time.
            raise InvalidStateError("Check-out time cannot be earlier than check-in time")

        record = replace(
            record,
            check_out=replace(record.check_out, time=now),
            total_hours=compute_total_hours(record.check_in.time, now),
        )
        self._attendance.save(record)

        logger.info("Check-out employee=%s at %s (%.2fh)", employee.employee_id, now.isoformat(), record.total_hours)
        return record

    def correct(
        self,
        attendance_id: int,
        changes: Correction,
        *,
        actor_id: int,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """HR correction of a record.

        Time edits are audited (modifiedBy / modifiedAt / originalTime);
        status and notes are overwritten without an audit trail.
        """
        now = _to_second(now or now_local())
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")

        check_in, check_out = record.check_in, record.check_out
        if changes.check_in_time is not None:
            check_in = _corrected(check_in, changes.check_in_time, actor_id=actor_id, now=now)
        if changes.check_out_time is not None:
            check_out = _corrected(check_out, changes.check_out_time, actor_id=actor_id, now=now)

        total_hours = record.total_hours
        if check_in.time is not None and check_out.time is not None:
            times_changed = changes.check_in_time is not None or changes.check_out_time is not None
            if times_changed and check_out.time < check_in.time:
                raise InvalidStateError("Check-out time cannot be earlier than check-in time")
            total_hours = compute_total_hours(check_in.time, check_out.time)

        record = replace(
            record,
            check_in=check_in,
            check_out=check_out,
            total_hours=total_hours,
            status=changes.status if changes.status is not None else record.status,
            notes=changes.notes if changes.notes is not None else record.notes,
        )
        if not self._attendance.save(record):
            raise NotFoundError("Attendance record not found")

        logger.info(
            "Attendance %s corrected by actor=%s (check_in=%s check_out=%s status=%s notes=%s)",
            record.attendance_id,
            actor_id,
            changes.check_in_time is not None,
            changes.check_out_time is not None,
            changes.status is not None,
            changes.notes is not None,
        )
        return record

    def today_for(self, telegram_id: str, *, now: datetime | None = None) -> tuple[Employee, Optional[AttendanceRecord]]:
        """Employee and today's record (or ``None``), used by the bot's status command."""
        now = _to_second(now or now_local())
        employee = self._employee_for(telegram_id)
        return employee, self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
