from __future__ import annotations

from datetime import date, datetime, time

import pytest

from attendance_portal.core.exceptions import NotFoundError, ValidationError
from attendance_portal.reporting.service import ReportingService, average_hours
from tests.fakes import present


@pytest.fixture
def reporting(attendance, employees) -> ReportingService:
    return ReportingService(attendance, employees, work_start=time(9, 0), window_days=7)


def test_daily_stats_counts_present_absent_and_late(reporting, attendance, employees):
    day = date(2026, 2, 2)
    staff = [employees.add(f"Employee {i}", str(1000 + i)) for i in range(10)]

    for e in staff[:4]:
        attendance.add(present(e.employee_id, datetime(2026, 2, 2, 8, 45)))
    attendance.add(present(staff[4].employee_id, datetime(2026, 2, 2, 9, 20)))
    attendance.add(present(staff[5].employee_id, datetime(2026, 2, 2, 10, 0)))

    stats = reporting.daily_stats(day)

    assert stats.to_dict() == {
        "totalEmployees": 10,
        "presentToday": 6,
        "absentToday": 4,
        "lateToday": 2,
        "averageHours": 0,
    }


def test_check_in_exactly_at_work_start_is_not_late(reporting, attendance, employees):
    e = employees.add("Punctual", "42")
    attendance.add(present(e.employee_id, datetime(2026, 2, 2, 9, 0)))

    assert reporting.daily_stats(date(2026, 2, 2)).late_today == 0


def test_inactive_employees_are_not_counted(reporting, employees):
    employees.add("Active", "1")
    employees.add("Gone", "2", active=False)

    stats = reporting.daily_stats(date(2026, 2, 2))

    assert stats.total_employees == 1
    assert stats.absent_today == 1


def test_average_hours_uses_trailing_window(reporting, attendance, employees):
    e = employees.add("Worker", "7")
    attendance.add(present(e.employee_id, datetime(2026, 2, 2, 9, 0), hours=8.0))
    attendance.add(present(e.employee_id, datetime(2026, 1, 30, 9, 0), hours=7.5))
    # Open day: contributes nothing.
    attendance.add(present(e.employee_id, datetime(2026, 1, 29, 9, 0)))
    # Outside the 7-day window.
    attendance.add(present(e.employee_id, datetime(2026, 1, 20, 9, 0), hours=2.0))

    assert reporting.daily_stats(date(2026, 2, 2)).average_hours == 7.75


def test_average_hours_is_zero_without_completed_days():
    assert average_hours([]) == 0
    assert average_hours([0, 0.0]) == 0
    assert average_hours([8.0, 7.0, 7.0]) == 7.33


def test_range_query_filters_and_orders_newest_first(reporting, attendance, employees):
    a = employees.add("Alice", "1")
    b = employees.add("Bob", "2")
    attendance.add(present(a.employee_id, datetime(2026, 2, 1, 9, 0)))
    attendance.add(present(a.employee_id, datetime(2026, 2, 3, 9, 0)))
    attendance.add(present(b.employee_id, datetime(2026, 2, 2, 9, 0)))
    attendance.add(present(a.employee_id, datetime(2026, 2, 10, 9, 0)))

    views = reporting.range_query(start_date=date(2026, 2, 1), end_date=date(2026, 2, 3))
    assert [v.record.work_date for v in views] == [date(2026, 2, 3), date(2026, 2, 2), date(2026, 2, 1)]

    only_alice = reporting.range_query(start_date=date(2026, 2, 1), end_date=date(2026, 2, 3), employee_id=a.employee_id)
    assert {v.employee.name for v in only_alice} == {"Alice"}
    assert len(only_alice) == 2


def test_range_query_ignores_single_bound(reporting, attendance, employees):
    a = employees.add("Alice", "1")
    attendance.add(present(a.employee_id, datetime(2026, 1, 1, 9, 0)))
    attendance.add(present(a.employee_id, datetime(2026, 2, 1, 9, 0)))

    assert len(reporting.range_query(start_date=date(2026, 1, 15))) == 2


def test_range_query_rejects_inverted_range(reporting):
    with pytest.raises(ValidationError):
        reporting.range_query(start_date=date(2026, 2, 3), end_date=date(2026, 2, 1))


def test_get_record_joins_employee(reporting, attendance, employees):
    a = employees.add("Alice", "1")
    rec = attendance.add(present(a.employee_id, datetime(2026, 2, 1, 9, 0)))

    view = reporting.get_record(rec.attendance_id)
    assert view.to_dict()["employee"]["name"] == "Alice"

    with pytest.raises(NotFoundError):
        reporting.get_record(999)
