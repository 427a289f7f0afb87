"""
Attendance status classification: late, undertime and overtime per record.

Lateness compares clock-in against the expected start on the clock-in's own
calendar date and is strict (arriving exactly at the start is on time).
Undertime and overtime only apply to completed records and are mutually
exclusive; hours equal to the expectation are neither.
"""
import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from app.core.exceptions import ComputationError, NotFoundError
from app.schemas.attendance import AttendanceEntry
from app.schemas.schedule import EffectiveSchedule
from app.schemas.status import (
    AnnotatedRecord,
    DetectionReport,
    StatusReport,
    StatusResult,
    StatusTotals,
)
from app.services.schedule_resolver import ScheduleDefaults, load_schedules, resolve, resolve_from
from app.utils.datetime_utils import format_hhmm, parse_hhmm, validate_range
from app.utils.rounding import round2, round_int

logger = logging.getLogger(__name__)


def compute_hours(clock_in: datetime, clock_out: datetime) -> float:
    """
    Elapsed wall-clock hours between clock-in and clock-out, 2 decimals.

    Raises:
        ComputationError: If clock_out is before clock_in
    """
    if clock_out < clock_in:
        raise ComputationError(
            f"Clock-out {clock_out.isoformat()} is before clock-in {clock_in.isoformat()}"
        )
    return round2((clock_out - clock_in).total_seconds() / 3600)


def classify(
    clock_in: datetime,
    clock_out: Optional[datetime],
    schedule: EffectiveSchedule,
) -> StatusResult:
    """
    Classify one attendance record against a schedule.

    Args:
        clock_in: Local clock-in time
        clock_out: Local clock-out time, None for an open record
        schedule: Effective schedule for the employee

    Returns:
        StatusResult; open records carry only the lateness verdict

    Raises:
        ParseError: If the schedule holds a malformed HH:MM value
        ComputationError: If clock_out is before clock_in
    """
    start = parse_hhmm(schedule.start_time)
    parse_hhmm(schedule.end_time)

    expected_start = datetime.combine(clock_in.date(), start)
    is_late = clock_in > expected_start
    late_minutes = round_int((clock_in - expected_start).total_seconds() / 60) if is_late else 0

    if clock_out is None:
        return StatusResult(
            clock_in_time=format_hhmm(clock_in),
            hours_worked=0.0,
            is_incomplete=True,
            is_late=is_late,
            late_minutes=late_minutes,
        )

    hours_worked = compute_hours(clock_in, clock_out)
    expected = schedule.expected_hours
    is_undertime = hours_worked < expected
    is_overtime = hours_worked > expected

    return StatusResult(
        clock_in_time=format_hhmm(clock_in),
        hours_worked=hours_worked,
        is_incomplete=False,
        is_late=is_late,
        late_minutes=late_minutes,
        is_undertime=is_undertime,
        undertime_hours=round2(expected - hours_worked) if is_undertime else 0.0,
        is_overtime=is_overtime,
        overtime_hours=round2(hours_worked - expected) if is_overtime else 0.0,
    )


def annotate(record: AttendanceEntry, schedule: EffectiveSchedule) -> AnnotatedRecord:
    """Pair a record with its classification"""
    return AnnotatedRecord(
        record=record,
        status=classify(record.clock_in, record.clock_out, schedule),
        schedule=schedule,
    )


def _totals(annotated: Iterable[AnnotatedRecord]) -> StatusTotals:
    items = list(annotated)
    late = [a for a in items if a.status.is_late]
    under = [a for a in items if a.status.is_undertime]
    over = [a for a in items if a.status.is_overtime]
    return StatusTotals(
        total_records=len(items),
        late_count=len(late),
        undertime_count=len(under),
        overtime_count=len(over),
        total_late_minutes=sum(a.status.late_minutes for a in late),
        total_undertime_hours=round2(sum(a.status.undertime_hours for a in under)),
        total_overtime_hours=round2(sum(a.status.overtime_hours for a in over)),
    )


def summarize_statuses(
    source,
    employee_id: int,
    start_date: date,
    end_date: date,
    defaults: ScheduleDefaults,
) -> StatusReport:
    """
    Status report for one employee over [start_date, end_date], open records included

    Raises:
        ValidationError: If the range is inverted
        NotFoundError: If the employee does not exist
    """
    validate_range(start_date, end_date)
    employee = source.get_employee(employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")

    schedule = resolve(source, employee_id, defaults)
    records = source.list_attendance(employee_id=employee_id, start=start_date, end=end_date)
    annotated = [annotate(r, schedule) for r in records]

    return StatusReport(
        employee_id=employee.id,
        employee_name=employee.name,
        start_date=start_date,
        end_date=end_date,
        schedule=schedule,
        summary=_totals(annotated),
        records=annotated,
    )


def detect_statuses(
    source,
    start_date: date,
    end_date: date,
    defaults: ScheduleDefaults,
) -> DetectionReport:
    """
    Late/undertime/overtime detection across all employees.

    Only completed records are considered; each record is judged against its
    own employee's schedule.
    """
    validate_range(start_date, end_date)
    records = source.list_attendance(start=start_date, end=end_date, completed_only=True)

    schedules = load_schedules(source)
    annotated: List[AnnotatedRecord] = [
        annotate(record, resolve_from(schedules, record.employee_id, defaults)) for record in records
    ]

    logger.debug("detect_statuses %s..%s: %d completed records", start_date, end_date, len(annotated))
    return DetectionReport(
        start_date=start_date,
        end_date=end_date,
        summary=_totals(annotated),
        late=[a for a in annotated if a.status.is_late],
        undertime=[a for a in annotated if a.status.is_undertime],
        overtime=[a for a in annotated if a.status.is_overtime],
    )
