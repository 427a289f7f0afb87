"""
Tests for incomplete-record and missing-day detection
"""
from datetime import date

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.services.exception_detector import detect, expected_work_days
from app.tests.fakes import InMemoryAttendanceSource


@pytest.fixture
def source():
    source = InMemoryAttendanceSource()
    source.add_employee(1, "Ada")
    return source


def test_full_week_without_attendance_has_five_missing_days(source):
    """2025-12-01 is a Monday; Mon-Fri are missing, the weekend is not"""
    report = detect(source, date(2025, 12, 1), date(2025, 12, 7))

    assert len(report.missing_days) == 5
    assert [m.day_of_week for m in report.missing_days] == [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
    ]
    assert report.incomplete_records == []
    assert report.summary.expected_work_days == 5
    assert report.summary.employees_with_issues == 1
    assert report.missing_days[0].issue_type == "absent"
    assert report.missing_days[0].severity == "medium"


def test_weekend_only_range_has_no_missing_days(source):
    report = detect(source, date(2025, 12, 6), date(2025, 12, 7))

    assert report.missing_days == []
    assert report.summary.expected_work_days == 0
    assert report.summary.employees_with_issues == 0


def test_open_record_counts_as_present_but_incomplete(source):
    """A day with only an open record is incomplete, not missing"""
    source.add_record(1, "2025-12-01T09:00:00")
    source.add_record(1, "2025-12-02T09:00:00", "2025-12-02T17:00:00")

    report = detect(source, date(2025, 12, 1), date(2025, 12, 5))

    assert len(report.incomplete_records) == 1
    issue = report.incomplete_records[0]
    assert issue.issue_type == "missing_clock_out"
    assert issue.severity == "high"
    assert issue.work_date == date(2025, 12, 1)
    assert issue.employee_name == "Ada"
    assert [m.missing_date for m in report.missing_days] == [
        date(2025, 12, 3), date(2025, 12, 4), date(2025, 12, 5),
    ]
    assert report.summary.employees_with_issues == 1


def test_employees_with_issues_is_distinct(source):
    source.add_employee(2, "Grace")
    for day in range(1, 6):
        source.add_record(2, f"2025-12-0{day}T09:00:00", f"2025-12-0{day}T17:00:00")
    source.add_employee(3, "Linus", active=False)

    report = detect(source, date(2025, 12, 1), date(2025, 12, 5))

    assert {m.employee_id for m in report.missing_days} == {1}
    assert report.summary.total_missing_days == 5
    assert report.summary.employees_with_issues == 1


def test_single_employee_filter(source):
    source.add_employee(2, "Grace")

    report = detect(source, date(2025, 12, 1), date(2025, 12, 2), employee_id=2)

    assert {m.employee_id for m in report.missing_days} == {2}
    with pytest.raises(NotFoundError):
        detect(source, date(2025, 12, 1), date(2025, 12, 2), employee_id=9)


def test_inverted_range_rejected(source):
    with pytest.raises(ValidationError):
        detect(source, date(2025, 12, 7), date(2025, 12, 1))


def test_expected_work_days_skip_weekends():
    days = expected_work_days(date(2025, 11, 28), date(2025, 12, 2))

    assert days == [date(2025, 11, 28), date(2025, 12, 1), date(2025, 12, 2)]
