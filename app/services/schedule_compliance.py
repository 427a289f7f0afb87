"""
Schedule compliance: actual start/end/hours against the expected schedule.

On-time here means clock-in at or before the expected start
(start_variance_minutes <= 0), which is looser than the classifier's
strict lateness rule. Keep the two separate.
"""
import logging
from datetime import date, datetime

from app.core.exceptions import NotFoundError
from app.schemas.reports import ComplianceDay, ComplianceReport, ComplianceSummary
from app.services.schedule_resolver import ScheduleDefaults, resolve
from app.utils.datetime_utils import format_hhmm, parse_hhmm, validate_range
from app.utils.rounding import percentage, round2, round_int

logger = logging.getLogger(__name__)


def compare(
    source,
    employee_id: int,
    start_date: date,
    end_date: date,
    defaults: ScheduleDefaults,
) -> ComplianceReport:
    """
    Compare each completed record in range with the employee's schedule

    Args:
        source: AttendanceSource
        employee_id: Employee to compare
        start_date: First day (inclusive)
        end_date: Last day (inclusive)
        defaults: Fallback schedule

    Returns:
        ComplianceReport with one entry per completed record and a roll-up

    Raises:
        ValidationError: If the range is inverted
        NotFoundError: If the employee does not exist
        ParseError: If the schedule start is malformed
    """
    validate_range(start_date, end_date)
    employee = source.get_employee(employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")

    schedule = resolve(source, employee_id, defaults)
    expected_start_time = parse_hhmm(schedule.start_time)
    expected_hours = schedule.expected_hours

    days = []
    for record in source.list_attendance(
        employee_id=employee_id, start=start_date, end=end_date, completed_only=True
    ):
        actual_hours = record.hours_worked or 0.0
        expected_start = datetime.combine(record.clock_in.date(), expected_start_time)
        variance_minutes = round_int((record.clock_in - expected_start).total_seconds() / 60)
        on_time = variance_minutes <= 0
        meets_hours = actual_hours >= expected_hours
        days.append(ComplianceDay(
            work_date=record.clock_in.date(),
            record_id=record.id,
            expected_start=schedule.start_time,
            expected_end=schedule.end_time,
            expected_hours=expected_hours,
            actual_start=format_hhmm(record.clock_in),
            actual_end=format_hhmm(record.clock_out),
            actual_hours=actual_hours,
            start_variance_minutes=variance_minutes,
            hours_variance=round2(actual_hours - expected_hours),
            on_time=on_time,
            meets_expected_hours=meets_hours,
            overall_compliant=on_time and meets_hours,
        ))

    total = len(days)
    on_time_days = sum(1 for d in days if d.on_time)
    meets_days = sum(1 for d in days if d.meets_expected_hours)
    full_days = sum(1 for d in days if d.overall_compliant)
    summary = ComplianceSummary(
        total_days=total,
        on_time_days=on_time_days,
        meets_hours_days=meets_days,
        full_compliance_days=full_days,
        on_time_percentage=percentage(on_time_days, total),
        meets_hours_percentage=percentage(meets_days, total),
        full_compliance_percentage=percentage(full_days, total),
        average_start_variance_minutes=(
            round_int(sum(d.start_variance_minutes for d in days) / total) if total else 0
        ),
        average_hours_variance=round2(sum(d.hours_variance for d in days) / total) if total else 0.0,
    )

    logger.debug("compare employee=%s %s..%s: %d days", employee_id, start_date, end_date, total)
    return ComplianceReport(
        employee_id=employee.id,
        employee_name=employee.name,
        start_date=start_date,
        end_date=end_date,
        schedule=schedule,
        summary=summary,
        days=days,
    )
