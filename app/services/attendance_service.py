"""
Attendance service - clock-in/out, badge scans and administrator corrections
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from app.models.attendance import AttendanceRecord
from app.models.employee import Employee
from app.schemas.attendance import AttendanceUpdate, ManualAttendanceCreate
from app.services.audit_service import log_audit
from app.services.employee_service import get_employee, get_employee_by_code
from app.services.status_classifier import compute_hours
from app.utils.datetime_utils import now_local, to_local, validate_range

logger = logging.getLogger(__name__)


def clean_notes(notes: Optional[str], max_length: int) -> Optional[str]:
    """Trim notes and cut them to max_length; blank notes become None"""
    if notes is None:
        return None
    notes = notes.strip()
    return notes[:max_length] if notes else None


def _commit_or_conflict(db: Session, employee_id: int, detail: str) -> None:
    """Commit; a second open record for the employee trips the partial unique index"""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Rejected write for employee %s: open record already exists", employee_id)
        raise ConflictError(detail)


def get_open_record(db: Session, employee_id: int) -> Optional[AttendanceRecord]:
    """Most recent record without a clock-out, if any"""
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.employee_id == employee_id,
            AttendanceRecord.clock_out.is_(None),
        )
        .order_by(AttendanceRecord.clock_in.desc(), AttendanceRecord.id.desc())
        .first()
    )


def clock_in(
    db: Session,
    employee_id: int,
    tz: ZoneInfo,
    now: Optional[datetime] = None,
) -> AttendanceRecord:
    """
    Open a new attendance record for the employee

    The open-record check runs under an employee row lock where the database
    supports one. Inserts that still race past it are rejected by the partial
    unique index on open records and surface as ConflictError.

    Args:
        db: Database session
        employee_id: Employee clocking in
        tz: Attendance calendar timezone
        now: Override for the current local time

    Returns:
        Created AttendanceRecord

    Raises:
        NotFoundError: If the employee does not exist
        PermissionDeniedError: If the employee is inactive
        ConflictError: If the employee already has an open record
    """
    employee = (
        db.query(Employee)
        .filter(Employee.id == employee_id)
        .with_for_update()
        .first()
    )
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    if not employee.active:
        raise PermissionDeniedError("Employee account is deactivated")

    if get_open_record(db, employee_id) is not None:
        db.rollback()
        logger.warning("Rejected clock-in for employee %s: already clocked in", employee_id)
        raise ConflictError("Already clocked in")

    record = AttendanceRecord(
        employee_id=employee_id,
        clock_in=to_local(now, tz) if now else now_local(tz),
    )
    db.add(record)
    _commit_or_conflict(db, employee_id, "Already clocked in")
    db.refresh(record)

    logger.info("Employee %s clocked in at %s (record %s)", employee_id, record.clock_in, record.id)
    return record


def clock_out(
    db: Session,
    employee_id: int,
    tz: ZoneInfo,
    notes: Optional[str] = None,
    notes_max_length: int = 500,
    now: Optional[datetime] = None,
) -> AttendanceRecord:
    """
    Close the employee's open record and compute hours worked

    Raises:
        NotFoundError: If the employee does not exist
        ConflictError: If there is no open record
        ComputationError: If the current time precedes the recorded clock-in
    """
    get_employee(db, employee_id)
    record = get_open_record(db, employee_id)
    if record is None:
        logger.warning("Rejected clock-out for employee %s: no open record", employee_id)
        raise ConflictError("No active clock-in found")

    clock_out_at = to_local(now, tz) if now else now_local(tz)
    record.hours_worked = compute_hours(record.clock_in, clock_out_at)
    record.clock_out = clock_out_at
    record.notes = clean_notes(notes, notes_max_length)
    db.commit()
    db.refresh(record)

    logger.info(
        "Employee %s clocked out at %s (record %s, %.2fh)",
        employee_id, record.clock_out, record.id, record.hours_worked,
    )
    return record


def get_status(db: Session, employee_id: int) -> Tuple[Employee, Optional[AttendanceRecord]]:
    """
    Employee and their open record (None when not clocked in)

    Raises:
        NotFoundError: If the employee does not exist
    """
    employee = get_employee(db, employee_id)
    return employee, get_open_record(db, employee_id)


def scan(
    db: Session,
    employee_code: str,
    tz: ZoneInfo,
    notes: Optional[str] = None,
    notes_max_length: int = 500,
    now: Optional[datetime] = None,
) -> Tuple[str, Employee, AttendanceRecord]:
    """
    Badge scan: clock out when a record is open, otherwise clock in

    Returns:
        (action, employee, record) where action is "clock_in" or "clock_out"

    Raises:
        NotFoundError: If no employee carries the code
        PermissionDeniedError: If the employee is inactive
    """
    employee = get_employee_by_code(db, employee_code)
    if not employee.active:
        raise PermissionDeniedError("Employee account is deactivated")

    if get_open_record(db, employee.id) is not None:
        record = clock_out(db, employee.id, tz, notes, notes_max_length, now=now)
        return "clock_out", employee, record
    record = clock_in(db, employee.id, tz, now=now)
    return "clock_in", employee, record


def list_records(
    db: Session,
    employee_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = 100,
    max_limit: int = 1000,
) -> Tuple[List[AttendanceRecord], int]:
    """
    Attendance records newest first, filtered by employee and clock-in date

    Returns:
        (records, total) where total counts all matches before the limit

    Raises:
        ValidationError: If both dates are given and start_date is after end_date
    """
    if start_date is not None and end_date is not None:
        validate_range(start_date, end_date)

    query = db.query(AttendanceRecord)
    if employee_id is not None:
        query = query.filter(AttendanceRecord.employee_id == employee_id)
    if start_date is not None:
        query = query.filter(AttendanceRecord.clock_in >= datetime.combine(start_date, time.min))
    if end_date is not None:
        query = query.filter(AttendanceRecord.clock_in < datetime.combine(end_date + timedelta(days=1), time.min))

    total = query.count()
    records = (
        query.order_by(AttendanceRecord.clock_in.desc(), AttendanceRecord.id.desc())
        .limit(min(limit, max_limit))
        .all()
    )
    return records, total


def get_record(db: Session, record_id: int) -> AttendanceRecord:
    """
    Raises:
        NotFoundError: If the record does not exist
    """
    record = db.query(AttendanceRecord).filter(AttendanceRecord.id == record_id).first()
    if record is None:
        raise NotFoundError(f"Attendance record {record_id} not found")
    return record


def create_manual_record(
    db: Session,
    data: ManualAttendanceCreate,
    tz: ZoneInfo,
    actor: str,
    notes_max_length: int = 500,
) -> AttendanceRecord:
    """
    Administrator-entered record with arbitrary timestamps.

    No open-record lookup is made on this path; only the open-record index applies.

    Raises:
        NotFoundError: If the employee does not exist
        ComputationError: If clock_out is before clock_in
        ConflictError: If the new record is open and another open record exists
    """
    get_employee(db, data.employee_id)
    clock_in_at = to_local(data.clock_in, tz)
    clock_out_at = to_local(data.clock_out, tz)

    record = AttendanceRecord(
        employee_id=data.employee_id,
        clock_in=clock_in_at,
        clock_out=clock_out_at,
        hours_worked=compute_hours(clock_in_at, clock_out_at) if clock_out_at else None,
        notes=clean_notes(data.notes, notes_max_length),
    )
    db.add(record)
    _commit_or_conflict(db, data.employee_id, "Employee already has an open attendance record")
    db.refresh(record)

    logger.info("Manual attendance record %s created for employee %s by %s", record.id, data.employee_id, actor)
    log_audit(db, actor, "ATTENDANCE_MANUAL_CREATE", "attendance_records", record.id, {
        "employee_id": record.employee_id,
        "clock_in": record.clock_in,
        "clock_out": record.clock_out,
        "hours_worked": record.hours_worked,
    })
    return record


def update_record(
    db: Session,
    record_id: int,
    data: AttendanceUpdate,
    tz: ZoneInfo,
    actor: str,
    notes_max_length: int = 500,
) -> AttendanceRecord:
    """
    Administrator correction of an existing record; hours are recomputed

    Raises:
        NotFoundError: If the record does not exist
        ComputationError: If the resulting clock_out is before clock_in
        ConflictError: If reopening the record would leave two open records
    """
    record = get_record(db, record_id)
    before = {"clock_in": record.clock_in, "clock_out": record.clock_out, "notes": record.notes}

    fields = data.model_dump(exclude_unset=True)
    clock_in_at = to_local(data.clock_in, tz) if data.clock_in is not None else record.clock_in
    clock_out_at = to_local(data.clock_out, tz) if "clock_out" in fields else record.clock_out

    record.hours_worked = compute_hours(clock_in_at, clock_out_at) if clock_out_at else None
    record.clock_in = clock_in_at
    record.clock_out = clock_out_at
    if "notes" in fields:
        record.notes = clean_notes(data.notes, notes_max_length)
    _commit_or_conflict(db, record.employee_id, "Employee already has an open attendance record")
    db.refresh(record)

    logger.info("Attendance record %s updated by %s", record.id, actor)
    log_audit(db, actor, "ATTENDANCE_MANUAL_UPDATE", "attendance_records", record.id, {
        "before": before,
        "after": {"clock_in": record.clock_in, "clock_out": record.clock_out, "notes": record.notes},
        "hours_worked": record.hours_worked,
    })
    return record


def delete_record(db: Session, record_id: int, actor: str) -> None:
    """
    Raises:
        NotFoundError: If the record does not exist
    """
    record = get_record(db, record_id)
    meta = {"employee_id": record.employee_id, "clock_in": record.clock_in, "clock_out": record.clock_out}
    db.delete(record)
    db.commit()
    logger.info("Attendance record %s deleted by %s", record_id, actor)
    log_audit(db, actor, "ATTENDANCE_DELETE", "attendance_records", record_id, meta)
