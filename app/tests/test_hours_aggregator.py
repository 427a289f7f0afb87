"""
Tests for daily/weekly/monthly hours aggregation
"""
from datetime import date

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.services import hours_aggregator
from app.services.schedule_resolver import ScheduleDefaults
from app.tests.fakes import InMemoryAttendanceSource

DEFAULTS = ScheduleDefaults()


@pytest.fixture
def source():
    source = InMemoryAttendanceSource()
    source.add_employee(1, "Ada")
    return source


def test_daily_counts_completed_and_incomplete(source):
    source.add_record(1, "2025-11-24T08:00:00", "2025-11-24T12:00:00", hours=4.0)
    source.add_record(1, "2025-11-24T13:00:00", "2025-11-24T17:15:00", hours=4.25)
    source.add_record(1, "2025-11-24T18:00:00")
    source.add_record(1, "2025-11-25T09:00:00", "2025-11-25T17:00:00", hours=8.0)

    daily = hours_aggregator.aggregate_daily(source, 1, date(2025, 11, 24))

    assert daily.total_hours == 8.25
    assert daily.total_records == 3
    assert daily.completed_records == 2
    assert daily.incomplete_records == 1
    assert len(daily.records) == 3


def test_daily_unknown_employee(source):
    with pytest.raises(NotFoundError):
        hours_aggregator.aggregate_daily(source, 2, date(2025, 11, 24))


def test_weekly_without_records_has_zero_average(source):
    """No division error when nothing was worked"""
    weekly = hours_aggregator.aggregate_weekly(source, 1, date(2025, 11, 24), DEFAULTS)

    assert weekly.days_worked == 0
    assert weekly.avg_hours_per_day == 0
    assert weekly.total_hours == 0
    assert weekly.end_date == date(2025, 11, 30)
    assert weekly.daily_breakdown == []


def test_weekly_counts_distinct_days_and_variance(source):
    source.add_record(1, "2025-11-24T09:00:00", "2025-11-24T13:00:00", hours=4.0)
    source.add_record(1, "2025-11-24T14:00:00", "2025-11-24T18:30:00", hours=4.5)
    source.add_record(1, "2025-11-26T09:00:00", "2025-11-26T16:00:00", hours=7.0)
    source.add_record(1, "2025-12-01T09:00:00", "2025-12-01T17:00:00", hours=8.0)  # outside window

    weekly = hours_aggregator.aggregate_weekly(source, 1, date(2025, 11, 24), DEFAULTS)

    assert weekly.days_worked == 2
    assert weekly.total_hours == 15.5
    assert weekly.avg_hours_per_day == 7.75
    assert weekly.expected_total_hours == 16.0
    assert weekly.hours_variance == -0.5
    assert [d.total_hours for d in weekly.daily_breakdown] == [8.5, 7.0]
    assert weekly.daily_breakdown[0].records_count == 2


def test_weekly_rounds_each_day_before_totalling(source):
    """Days are rounded before the window total: two 0.004h days total 0, not 0.01"""
    source.add_record(1, "2025-11-24T09:00:00", "2025-11-24T09:01:00", hours=0.004)
    source.add_record(1, "2025-11-25T09:00:00", "2025-11-25T09:01:00", hours=0.004)
    source.add_record(1, "2025-11-26T09:00:00", "2025-11-26T10:00:00", hours=1.0)

    weekly = hours_aggregator.aggregate_weekly(source, 1, date(2025, 11, 24), DEFAULTS)

    assert [d.total_hours for d in weekly.daily_breakdown] == [0.0, 0.0, 1.0]
    assert weekly.total_hours == 1.0
    assert weekly.days_worked == 3


def test_weekly_custom_end_date_and_inverted_range(source):
    weekly = hours_aggregator.aggregate_weekly(
        source, 1, date(2025, 11, 24), DEFAULTS, end_date=date(2025, 11, 25)
    )
    assert weekly.end_date == date(2025, 11, 25)

    with pytest.raises(ValidationError):
        hours_aggregator.aggregate_weekly(source, 1, date(2025, 11, 24), DEFAULTS, end_date=date(2025, 11, 20))


def test_monthly_week_buckets_follow_day_of_month(source):
    """Day 7 is Week 1, day 8 Week 2, day 29 Week 5"""
    source.add_record(1, "2025-12-07T09:00:00", "2025-12-07T17:00:00", hours=8.0)
    source.add_record(1, "2025-12-08T09:00:00", "2025-12-08T13:00:00", hours=4.0)
    source.add_record(1, "2025-12-29T09:00:00", "2025-12-29T15:00:00", hours=6.0)
    source.add_record(1, "2026-01-01T09:00:00", "2026-01-01T17:00:00", hours=8.0)

    monthly = hours_aggregator.aggregate_monthly(source, 1, 2025, 12, DEFAULTS)

    assert monthly.month_name == "December"
    assert monthly.start_date == date(2025, 12, 1)
    assert monthly.end_date == date(2025, 12, 31)
    assert monthly.total_hours == 18.0
    assert monthly.days_worked == 3
    assert monthly.avg_hours_per_day == 6.0
    assert [(w.week, w.days, w.hours) for w in monthly.weekly_summary] == [
        ("Week 1", 1, 8.0),
        ("Week 2", 1, 4.0),
        ("Week 5", 1, 6.0),
    ]


def test_monthly_rejects_bad_month(source):
    with pytest.raises(ValidationError):
        hours_aggregator.aggregate_monthly(source, 1, 2025, 13, DEFAULTS)


def test_summarize_all_includes_employees_without_records(source):
    source.add_employee(2, "Grace")
    source.add_employee(3, "Inactive", active=False)
    source.set_schedule(2, "09:00", "15:00", 6.0)
    source.add_record(2, "2025-11-24T09:00:00", "2025-11-24T15:00:00", hours=6.0)
    source.add_record(2, "2025-11-25T09:00:00", "2025-11-25T12:00:00", hours=3.0)
    source.add_record(2, "2025-11-26T09:00:00")
    source.add_record(3, "2025-11-24T09:00:00", "2025-11-24T17:00:00", hours=8.0)

    report = hours_aggregator.summarize_all(source, date(2025, 11, 24), date(2025, 11, 30), DEFAULTS)

    rows = {r.employee_id: r for r in report.employees}
    assert set(rows) == {1, 2}
    assert report.period_type == "custom"

    ada = rows[1]
    assert ada.days_worked == 0
    assert ada.total_hours == 0
    assert ada.compliance_percentage == 0
    assert ada.expected_total_hours == 0

    grace = rows[2]
    assert grace.days_worked == 3
    assert grace.total_hours == 9.0
    assert grace.incomplete_records == 1
    assert grace.expected_total_hours == 18.0
    assert grace.hours_variance == -9.0
    assert grace.compliance_percentage == 50


def test_aggregate_window_dispatch(source):
    source.add_record(1, "2025-11-24T09:00:00", "2025-11-24T17:00:00", hours=8.0)

    daily = hours_aggregator.aggregate_window(source, 1, date(2025, 11, 24), "daily", DEFAULTS)
    monthly = hours_aggregator.aggregate_window(source, 1, date(2025, 11, 24), "monthly", DEFAULTS)

    assert daily.total_hours == 8.0
    assert monthly.month == 11
    with pytest.raises(ValidationError):
        hours_aggregator.aggregate_window(source, 1, date(2025, 11, 24), "yearly", DEFAULTS)
