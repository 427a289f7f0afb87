"""
Worked-hours aggregation over daily, weekly, monthly and arbitrary windows.

Totals are rounded to 2 decimals at every step: each calendar day is rounded
first, then the window total is rounded from the rounded day figures.
"""
import calendar
import logging
import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.attendance import AttendanceEntry
from app.schemas.employee import EmployeeRef
from app.schemas.work_hours import (
    DailyHours,
    DayBreakdown,
    EmployeeHoursSummary,
    HoursSummaryReport,
    MonthlyHours,
    WeekBucket,
    WindowHours,
)
from app.services.schedule_resolver import ScheduleDefaults, load_schedules, resolve, resolve_from
from app.utils.datetime_utils import validate_range
from app.utils.rounding import percentage, round2

logger = logging.getLogger(__name__)


def _require_employee(source, employee_id: int) -> EmployeeRef:
    employee = source.get_employee(employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return employee


def _hours(record: AttendanceEntry) -> float:
    return record.hours_worked or 0.0


def daily_breakdown(records: Iterable[AttendanceEntry]) -> List[DayBreakdown]:
    """Per-calendar-date totals ordered by date; only dates with records appear"""
    by_day: Dict[date, List[AttendanceEntry]] = defaultdict(list)
    for record in records:
        by_day[record.clock_in.date()].append(record)
    return [
        DayBreakdown(
            work_date=day,
            total_hours=round2(sum(_hours(r) for r in day_records)),
            records_count=len(day_records),
            incomplete_count=sum(1 for r in day_records if not r.is_complete),
        )
        for day, day_records in sorted(by_day.items())
    ]


def aggregate_daily(source, employee_id: int, day: date) -> DailyHours:
    """
    Hours for one employee on one calendar date

    Raises:
        NotFoundError: If the employee does not exist
    """
    _require_employee(source, employee_id)
    records = list(source.list_attendance(employee_id=employee_id, start=day, end=day))
    completed = sum(1 for r in records if r.is_complete)
    return DailyHours(
        employee_id=employee_id,
        work_date=day,
        total_hours=round2(sum(_hours(r) for r in records)),
        total_records=len(records),
        completed_records=completed,
        incomplete_records=len(records) - completed,
        records=records,
    )


def _window(
    source,
    employee_id: int,
    start_date: date,
    end_date: date,
    defaults: ScheduleDefaults,
) -> dict:
    records = source.list_attendance(employee_id=employee_id, start=start_date, end=end_date)
    days = daily_breakdown(records)
    raw_total = sum(d.total_hours for d in days)
    days_worked = len(days)
    expected = resolve(source, employee_id, defaults).expected_hours
    total_hours = round2(raw_total)
    expected_total = round2(expected * days_worked)
    return dict(
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        total_hours=total_hours,
        days_worked=days_worked,
        avg_hours_per_day=round2(raw_total / days_worked) if days_worked else 0.0,
        expected_hours_per_day=expected,
        expected_total_hours=expected_total,
        hours_variance=round2(total_hours - expected_total),
        daily_breakdown=days,
    )


def aggregate_weekly(
    source,
    employee_id: int,
    start_date: date,
    defaults: ScheduleDefaults,
    end_date: Optional[date] = None,
) -> WindowHours:
    """
    Hours for one employee over a week-like window

    Args:
        source: AttendanceSource
        employee_id: Employee to aggregate
        start_date: First day of the window
        defaults: Fallback schedule for the expected-hours comparison
        end_date: Last day (inclusive); defaults to start_date + 6 days

    Returns:
        WindowHours; days_worked counts distinct dates with at least one record

    Raises:
        ValidationError: If end_date is before start_date
        NotFoundError: If the employee does not exist
    """
    if end_date is None:
        end_date = start_date + timedelta(days=6)
    validate_range(start_date, end_date)
    _require_employee(source, employee_id)
    return WindowHours(**_window(source, employee_id, start_date, end_date, defaults))


def aggregate_monthly(
    source,
    employee_id: int,
    year: int,
    month: int,
    defaults: ScheduleDefaults,
) -> MonthlyHours:
    """
    Hours for one employee over a calendar month, with "Week N" buckets.

    Buckets follow day-of-month (days 1-7 are Week 1, 29-31 are Week 5), not ISO weeks.

    Raises:
        ValidationError: If month is outside 1-12
        NotFoundError: If the employee does not exist
    """
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    _require_employee(source, employee_id)

    start_date = date(year, month, 1)
    end_date = date(year, month, calendar.monthrange(year, month)[1])
    window = _window(source, employee_id, start_date, end_date, defaults)

    buckets: Dict[int, List[DayBreakdown]] = defaultdict(list)
    for day in window["daily_breakdown"]:
        buckets[math.ceil(day.work_date.day / 7)].append(day)
    weekly_summary = [
        WeekBucket(
            week=f"Week {n}",
            days=len(days),
            hours=round2(sum(d.total_hours for d in days)),
        )
        for n, days in sorted(buckets.items())
    ]

    return MonthlyHours(
        **window,
        year=year,
        month=month,
        month_name=calendar.month_name[month],
        weekly_summary=weekly_summary,
    )


def summarize_all(
    source,
    start_date: date,
    end_date: date,
    defaults: ScheduleDefaults,
    period_type: Optional[str] = "custom",
) -> HoursSummaryReport:
    """
    Per-employee hours summary for every active employee.

    Employees without attendance in the range still appear with zero totals.
    compliance_percentage is actual over expected hours, 0 when nothing was expected.
    """
    validate_range(start_date, end_date)
    by_employee: Dict[int, List[AttendanceEntry]] = defaultdict(list)
    for record in source.list_attendance(start=start_date, end=end_date):
        by_employee[record.employee_id].append(record)

    schedules = load_schedules(source)
    rows = []
    for employee in source.list_active_employees():
        records = by_employee.get(employee.id, [])
        days = daily_breakdown(records)
        days_worked = len(days)
        raw_total = sum(d.total_hours for d in days)
        total_hours = round2(raw_total)
        expected = resolve_from(schedules, employee.id, defaults).expected_hours
        expected_total = round2(expected * days_worked)
        rows.append(EmployeeHoursSummary(
            employee_id=employee.id,
            employee_code=employee.employee_code,
            employee_name=employee.name,
            days_worked=days_worked,
            total_hours=total_hours,
            avg_hours_per_day=round2(raw_total / days_worked) if days_worked else 0.0,
            incomplete_records=sum(1 for r in records if not r.is_complete),
            expected_hours_per_day=expected,
            expected_total_hours=expected_total,
            hours_variance=round2(total_hours - expected_total),
            compliance_percentage=percentage(total_hours, expected_total),
        ))

    logger.debug("summarize_all %s..%s: %d employees", start_date, end_date, len(rows))
    return HoursSummaryReport(
        start_date=start_date,
        end_date=end_date,
        period_type=period_type or "custom",
        employees=rows,
    )


GRANULARITIES = ("daily", "weekly", "monthly")


def aggregate_window(
    source,
    employee_id: int,
    start_date: date,
    granularity: str,
    defaults: ScheduleDefaults,
    end_date: Optional[date] = None,
):
    """Dispatch to the daily, weekly or monthly aggregate; monthly uses start_date's month"""
    if granularity == "daily":
        return aggregate_daily(source, employee_id, start_date)
    if granularity == "weekly":
        return aggregate_weekly(source, employee_id, start_date, defaults, end_date=end_date)
    if granularity == "monthly":
        return aggregate_monthly(source, employee_id, start_date.year, start_date.month, defaults)
    raise ValidationError(f"granularity must be one of {list(GRANULARITIES)}")
