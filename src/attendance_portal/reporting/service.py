from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_clock
from ..core.constants import DEFAULT_STATS_WINDOW_DAYS, DEFAULT_WORK_START
from ..core.exceptions import NotFoundError, ValidationError
from ..attendance.model import AttendanceView
from ..attendance.repository import AttendanceRepository
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class DailyStats:
    total_employees: int
    present_today: int
    absent_today: int
    late_today: int
    average_hours: float

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "presentToday": self.present_today,
            "absentToday": self.absent_today,
            "lateToday": self.late_today,
            "averageHours": self.average_hours,
        }


def average_hours(values: Sequence[float]) -> float:
    hours = [Decimal(str(v)) for v in values if v]
    if not hours:
        return 0
    mean = sum(hours) / len(hours)
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ReportingService:
    """Read-only questions over the ledger: dashboard stats and range listings."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        work_start: time = parse_clock(DEFAULT_WORK_START),
        window_days: int = DEFAULT_STATS_WINDOW_DAYS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._work_start = work_start
        self._window_days = int(window_days)

    def daily_stats(self, day: Optional[date] = None) -> DailyStats:
        day = day or now_local().date()

        total = self._employees.count_active()
        present = self._attendance.count_checked_in(day)
        late = self._attendance.count_checked_in(day, after=datetime.combine(day, self._work_start))
        hours = self._attendance.hours_between(day - timedelta(days=self._window_days), day + timedelta(days=1))

        return DailyStats(
            total_employees=total,
            present_today=present,
            absent_today=total - present,
            late_today=late,
            average_hours=average_hours(hours),
        )

    def range_query(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceView]:
        # Date filtering only applies when both bounds are given.
        if start_date is None or end_date is None:
            start_date = end_date = None
        elif end_date < start_date:
            raise ValidationError("endDate must not be before startDate")

        return self._attendance.list_views(start_date=start_date, end_date=end_date, employee_id=employee_id)

    def get_record(self, attendance_id: int) -> AttendanceView:
        view = self._attendance.get_view(int(attendance_id))
        if not view:
            raise NotFoundError("Attendance record not found")
        return view
