"""
Payroll summaries built from classified attendance.

Pay is gross hours worked times an hourly rate; break time is not deducted.
Open records contribute zero hours.
"""
import logging
import math
from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence

from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.attendance import AttendanceEntry
from app.schemas.employee import EmployeeRef
from app.schemas.reports import (
    EmployeePayroll,
    EmployeePayrollLine,
    PayrollDay,
    PayrollReport,
    PayrollTotals,
)
from app.schemas.schedule import EffectiveSchedule
from app.services.exception_detector import expected_work_days
from app.services.schedule_resolver import ScheduleDefaults, load_schedules, resolve, resolve_from
from app.services.status_classifier import annotate
from app.utils.datetime_utils import is_weekday, validate_range
from app.utils.rounding import percentage, round2, round_int

logger = logging.getLogger(__name__)


def _validate_rate(hourly_rate: float) -> None:
    if hourly_rate is None or not math.isfinite(hourly_rate) or hourly_rate < 0:
        raise ValidationError("hourly_rate must be a finite number, zero or positive")


def _build_payroll(
    employee: EmployeeRef,
    records: Sequence[AttendanceEntry],
    schedule: EffectiveSchedule,
    start_date: date,
    end_date: date,
    hourly_rate: float,
) -> EmployeePayroll:
    by_day = defaultdict(list)
    for record in records:
        by_day[record.clock_in.date()].append(annotate(record, schedule))

    breakdown: List[PayrollDay] = []
    for day, annotated in sorted(by_day.items()):
        hours = round2(sum(a.status.hours_worked for a in annotated))
        breakdown.append(PayrollDay(
            work_date=day,
            hours=hours,
            records=len(annotated),
            incomplete_records=sum(1 for a in annotated if a.status.is_incomplete),
            late_count=sum(1 for a in annotated if a.status.is_late),
            overtime_hours=round2(sum(a.status.overtime_hours for a in annotated)),
            undertime_hours=round2(sum(a.status.undertime_hours for a in annotated)),
            amount=round2(hours * hourly_rate),
        ))

    total_hours = round2(sum(d.hours for d in breakdown))
    return EmployeePayroll(
        employee_id=employee.id,
        employee_code=employee.employee_code,
        employee_name=employee.name,
        start_date=start_date,
        end_date=end_date,
        hourly_rate=hourly_rate,
        total_hours=total_hours,
        payroll_amount=round2(total_hours * hourly_rate),
        days_worked=len(breakdown),
        late_count=sum(d.late_count for d in breakdown),
        overtime_hours=round2(sum(d.overtime_hours for d in breakdown)),
        undertime_hours=round2(sum(d.undertime_hours for d in breakdown)),
        daily_breakdown=breakdown,
    )


def summarize_one(
    source,
    employee_id: int,
    start_date: date,
    end_date: date,
    hourly_rate: float,
    defaults: ScheduleDefaults,
) -> EmployeePayroll:
    """
    Payroll for one employee over [start_date, end_date]

    Args:
        source: AttendanceSource
        employee_id: Employee to pay
        start_date: First day (inclusive)
        end_date: Last day (inclusive)
        hourly_rate: Pay per hour, zero or positive
        defaults: Fallback schedule used for the overtime/undertime figures

    Returns:
        EmployeePayroll with a per-day breakdown

    Raises:
        ValidationError: If the range is inverted or the rate is negative
        NotFoundError: If the employee does not exist
    """
    validate_range(start_date, end_date)
    _validate_rate(hourly_rate)
    employee = source.get_employee(employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")

    records = source.list_attendance(employee_id=employee_id, start=start_date, end=end_date)
    schedule = resolve(source, employee_id, defaults)
    return _build_payroll(employee, records, schedule, start_date, end_date, hourly_rate)


def summarize_all(
    source,
    start_date: date,
    end_date: date,
    hourly_rate: float,
    defaults: ScheduleDefaults,
) -> PayrollReport:
    """
    Payroll for every active employee plus attendance-rate figures and totals.

    attendance_rate is attended weekdays over expected weekdays, as a whole
    percentage; 0 when the range holds no weekdays.
    """
    validate_range(start_date, end_date)
    _validate_rate(hourly_rate)

    by_employee: Dict[int, List[AttendanceEntry]] = defaultdict(list)
    for record in source.list_attendance(start=start_date, end=end_date):
        by_employee[record.employee_id].append(record)

    work_days = expected_work_days(start_date, end_date)
    schedules = load_schedules(source)
    lines: List[EmployeePayrollLine] = []
    for employee in source.list_active_employees():
        records = by_employee.get(employee.id, [])
        payroll = _build_payroll(
            employee,
            records,
            resolve_from(schedules, employee.id, defaults),
            start_date,
            end_date,
            hourly_rate,
        )
        attended = {r.clock_in.date() for r in records if is_weekday(r.clock_in.date())}
        lines.append(EmployeePayrollLine(
            **payroll.model_dump(),
            expected_work_days=len(work_days),
            actual_work_days=len(attended),
            missing_days=len(work_days) - len(attended),
            attendance_rate=percentage(len(attended), len(work_days)),
        ))

    totals = PayrollTotals(
        employees=len(lines),
        total_hours=round2(sum(line.total_hours for line in lines)),
        total_payroll=round2(sum(line.payroll_amount for line in lines)),
        total_missing_days=sum(line.missing_days for line in lines),
        average_attendance_rate=(
            round_int(sum(line.attendance_rate for line in lines) / len(lines)) if lines else 0
        ),
    )
    logger.info(
        "Payroll %s..%s: %d employees, total %.2f",
        start_date, end_date, totals.employees, totals.total_payroll,
    )
    return PayrollReport(
        start_date=start_date,
        end_date=end_date,
        hourly_rate=hourly_rate,
        expected_work_days=len(work_days),
        totals=totals,
        employees=lines,
    )
