"""
Tests for payroll summaries
"""
from datetime import date

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.services import payroll_service
from app.services.schedule_resolver import ScheduleDefaults
from app.tests.fakes import InMemoryAttendanceSource

DEFAULTS = ScheduleDefaults()
START, END = date(2025, 12, 1), date(2025, 12, 7)


@pytest.fixture
def source():
    source = InMemoryAttendanceSource()
    source.add_employee(1, "Ada")
    source.add_record(1, "2025-12-01T09:15:00", "2025-12-01T17:30:00")  # 8.25h, late, OT 0.25
    source.add_record(1, "2025-12-02T09:00:00", "2025-12-02T13:00:00")  # 4h
    source.add_record(1, "2025-12-02T14:00:00", "2025-12-02T17:30:00")  # 3.5h
    source.add_record(1, "2025-12-03T09:00:00")  # open, 0h
    return source


def test_summarize_one_totals_and_breakdown(source):
    payroll = payroll_service.summarize_one(source, 1, START, END, 20.0, DEFAULTS)

    assert payroll.total_hours == 15.75
    assert payroll.payroll_amount == 315.0
    assert payroll.days_worked == 3
    assert payroll.late_count == 1
    assert payroll.overtime_hours == 0.25
    assert [(d.work_date.day, d.hours, d.amount) for d in payroll.daily_breakdown] == [
        (1, 8.25, 165.0),
        (2, 7.5, 150.0),
        (3, 0.0, 0.0),
    ]
    assert payroll.daily_breakdown[2].incomplete_records == 1


def test_payroll_amount_rounds_half_up(source):
    payroll = payroll_service.summarize_one(source, 1, START, END, 10.333, DEFAULTS)

    # 15.75 * 10.333 = 162.74475
    assert payroll.payroll_amount == 162.74


@pytest.mark.parametrize("low, high", [(0.0, 1.0), (12.5, 12.51), (15.0, 40.0)])
def test_payroll_is_monotonic_in_rate(source, low, high):
    cheap = payroll_service.summarize_one(source, 1, START, END, low, DEFAULTS)
    dear = payroll_service.summarize_one(source, 1, START, END, high, DEFAULTS)

    assert dear.payroll_amount >= cheap.payroll_amount


def test_payroll_is_monotonic_in_hours(source):
    before = payroll_service.summarize_one(source, 1, START, END, 18.0, DEFAULTS)
    source.add_record(1, "2025-12-04T09:00:00", "2025-12-04T10:00:00")
    after = payroll_service.summarize_one(source, 1, START, END, 18.0, DEFAULTS)

    assert after.total_hours > before.total_hours
    assert after.payroll_amount > before.payroll_amount


def test_negative_rate_rejected(source):
    with pytest.raises(ValidationError):
        payroll_service.summarize_one(source, 1, START, END, -1.0, DEFAULTS)


@pytest.mark.parametrize("rate", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_rate_rejected(source, rate):
    with pytest.raises(ValidationError):
        payroll_service.summarize_one(source, 1, START, END, rate, DEFAULTS)
    with pytest.raises(ValidationError):
        payroll_service.summarize_all(source, START, END, rate, DEFAULTS)


def test_unknown_employee(source):
    with pytest.raises(NotFoundError):
        payroll_service.summarize_one(source, 5, START, END, 10.0, DEFAULTS)


def test_summarize_all_attendance_rate_and_totals(source):
    source.add_employee(2, "Grace")
    source.add_record(2, "2025-12-06T10:00:00", "2025-12-06T14:00:00")  # Saturday: paid, not a work-day
    source.add_employee(3, "Linus", active=False)
    source.add_record(3, "2025-12-01T09:00:00", "2025-12-01T17:00:00")

    report = payroll_service.summarize_all(source, START, END, 10.0, DEFAULTS)

    lines = {line.employee_id: line for line in report.employees}
    assert set(lines) == {1, 2}
    assert report.expected_work_days == 5

    ada = lines[1]
    assert ada.actual_work_days == 3
    assert ada.missing_days == 2
    assert ada.attendance_rate == 60
    assert ada.payroll_amount == 157.5

    grace = lines[2]
    assert grace.total_hours == 4.0
    assert grace.actual_work_days == 0
    assert grace.attendance_rate == 0

    assert report.totals.employees == 2
    assert report.totals.total_hours == 19.75
    assert report.totals.total_payroll == 197.5
    assert report.totals.total_missing_days == 7
    assert report.totals.average_attendance_rate == 30


def test_summarize_all_weekend_range_guards_division(source):
    report = payroll_service.summarize_all(source, date(2025, 12, 6), date(2025, 12, 7), 10.0, DEFAULTS)

    assert report.expected_work_days == 0
    assert all(line.attendance_rate == 0 for line in report.employees)
