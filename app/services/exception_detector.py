"""
Attendance exception detection: open records and absent work-days.

Work-days are Monday to Friday with no holiday calendar. Any attendance row on
a date, complete or not, means the employee was present that day.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Set

from app.core.exceptions import NotFoundError
from app.schemas.reports import (
    ExceptionReport,
    ExceptionSummary,
    IncompleteRecordIssue,
    MissingDayIssue,
)
from app.utils.datetime_utils import is_weekday, iter_dates, validate_range, weekday_name

logger = logging.getLogger(__name__)


def expected_work_days(start_date: date, end_date: date) -> List[date]:
    """Weekdays in [start_date, end_date]"""
    return [d for d in iter_dates(start_date, end_date) if is_weekday(d)]


def detect(
    source,
    start_date: date,
    end_date: date,
    employee_id: Optional[int] = None,
) -> ExceptionReport:
    """
    Find incomplete records and missing work-days.

    Args:
        source: AttendanceSource
        start_date: First day (inclusive)
        end_date: Last day (inclusive)
        employee_id: Restrict to one employee; otherwise all active employees

    Returns:
        ExceptionReport

    Raises:
        ValidationError: If the range is inverted
        NotFoundError: If employee_id is given and does not exist
    """
    validate_range(start_date, end_date)
    if employee_id is not None:
        employee = source.get_employee(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        employees = [employee]
    else:
        employees = list(source.list_active_employees())

    records = source.list_attendance(employee_id=employee_id, start=start_date, end=end_date)

    attended: Dict[int, Set[date]] = defaultdict(set)
    for record in records:
        attended[record.employee_id].add(record.clock_in.date())

    incomplete = [
        IncompleteRecordIssue(
            record_id=r.id,
            employee_id=r.employee_id,
            employee_name=r.employee_name or "",
            clock_in=r.clock_in,
            work_date=r.clock_in.date(),
            description=f"Clock-in at {r.clock_in.isoformat(sep=' ')} has no clock-out",
        )
        for r in sorted(records, key=lambda r: r.clock_in, reverse=True)
        if not r.is_complete
    ]

    work_days = expected_work_days(start_date, end_date)
    missing = [
        MissingDayIssue(
            employee_id=emp.id,
            employee_name=emp.name,
            missing_date=day,
            day_of_week=weekday_name(day),
            description=f"No attendance record for {day.isoformat()}",
        )
        for emp in employees
        for day in work_days
        if day not in attended.get(emp.id, set())
    ]

    with_issues = {i.employee_id for i in incomplete} | {m.employee_id for m in missing}
    logger.debug(
        "detect %s..%s: %d incomplete, %d missing",
        start_date, end_date, len(incomplete), len(missing),
    )
    return ExceptionReport(
        start_date=start_date,
        end_date=end_date,
        summary=ExceptionSummary(
            expected_work_days=len(work_days),
            total_incomplete_records=len(incomplete),
            total_missing_days=len(missing),
            employees_with_issues=len(with_issues),
        ),
        incomplete_records=incomplete,
        missing_days=missing,
    )
