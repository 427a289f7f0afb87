"""
Attendance endpoints: clock-in/out, badge scan, status, listing and admin corrections.
Employees may act on their own attendance only; ADMIN may act on anyone's.
"""
import logging
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import (
    CurrentUser,
    ensure_self_or_admin,
    get_attendance_source,
    get_current_user,
    get_db,
    get_schedule_defaults,
    get_timezone,
    require_roles,
)
from app.models.employee import Role
from app.schemas.attendance import (
    AttendanceListResponse,
    AttendanceOut,
    AttendanceStatusOut,
    AttendanceUpdate,
    ClockInRequest,
    ClockOutRequest,
    ManualAttendanceCreate,
    ScanRequest,
    ScanResult,
)
from app.schemas.status import DetectionReport, StatusReport
from app.services import attendance_service
from app.services.attendance_source import SqlAlchemyAttendanceSource
from app.services.schedule_resolver import ScheduleDefaults
from app.services.status_classifier import detect_statuses, summarize_statuses

router = APIRouter()
_log = logging.getLogger(__name__)


@router.post("/clock-in", response_model=AttendanceOut, status_code=201)
async def clock_in_endpoint(
    body: ClockInRequest,
    db: Session = Depends(get_db),
    tz: ZoneInfo = Depends(get_timezone),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Open an attendance record at the current local time.
    Already clocked in => 409; unknown employee => 404; deactivated => 403.
    """
    ensure_self_or_admin(current_user, body.employee_id)
    return attendance_service.clock_in(db, body.employee_id, tz)


@router.post("/clock-out", response_model=AttendanceOut)
async def clock_out_endpoint(
    body: ClockOutRequest,
    db: Session = Depends(get_db),
    tz: ZoneInfo = Depends(get_timezone),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Close the open record and compute hours worked. No open record => 409."""
    ensure_self_or_admin(current_user, body.employee_id)
    return attendance_service.clock_out(
        db, body.employee_id, tz, notes=body.notes, notes_max_length=settings.NOTES_MAX_LENGTH
    )


@router.post("/scan", response_model=ScanResult)
async def scan_endpoint(
    body: ScanRequest,
    db: Session = Depends(get_db),
    tz: ZoneInfo = Depends(get_timezone),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Badge scan from the kiosk: toggles between clock-in and clock-out"""
    action, employee, record = attendance_service.scan(
        db, body.employee_code, tz, notes=body.notes, notes_max_length=settings.NOTES_MAX_LENGTH
    )
    _log.info("Scan %s -> %s (employee %s)", body.employee_code, action, employee.id)
    return ScanResult(
        action=action,
        employee_id=employee.id,
        employee_name=employee.name,
        record=AttendanceOut.model_validate(record),
    )


@router.get("/status/{employee_id}", response_model=AttendanceStatusOut)
async def status_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Whether the employee is currently clocked in, with the open record"""
    ensure_self_or_admin(current_user, employee_id)
    employee, record = attendance_service.get_status(db, employee_id)
    return AttendanceStatusOut(
        employee_id=employee.id,
        clocked_in=record is not None,
        record=AttendanceOut.model_validate(record) if record else None,
    )


@router.get("/status-report/{employee_id}", response_model=StatusReport)
async def status_report_endpoint(
    employee_id: int,
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Late/undertime/overtime classification of every record in range, with totals"""
    ensure_self_or_admin(current_user, employee_id)
    return summarize_statuses(source, employee_id, start_date, end_date, defaults)


@router.get("/detection", response_model=DetectionReport)
async def detection_endpoint(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Organisation-wide late/undertime/overtime lists over completed records (ADMIN-only)"""
    return detect_statuses(source, start_date, end_date, defaults)


@router.post("/manual", response_model=AttendanceOut, status_code=201)
async def create_manual_endpoint(
    body: ManualAttendanceCreate,
    db: Session = Depends(get_db),
    tz: ZoneInfo = Depends(get_timezone),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Enter a record with arbitrary timestamps (ADMIN correction path)"""
    return attendance_service.create_manual_record(
        db, body, tz, current_user.subject, notes_max_length=settings.NOTES_MAX_LENGTH
    )


@router.get("", response_model=AttendanceListResponse)
async def list_attendance_endpoint(
    employee_id: Optional[int] = Query(None, description="Filter by employee ID"),
    start_date: Optional[date] = Query(None, description="Earliest clock-in date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Latest clock-in date (YYYY-MM-DD)"),
    limit: int = Query(100, ge=1, description="Maximum rows returned (capped by ATTENDANCE_LIST_MAX_LIMIT)"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    List attendance newest first.
    Employees always see only their own records, whatever employee_id they pass.
    """
    if not current_user.is_admin:
        employee_id = current_user.employee_id
    records, total = attendance_service.list_records(
        db,
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        max_limit=settings.ATTENDANCE_LIST_MAX_LIMIT,
    )
    return AttendanceListResponse(
        items=[AttendanceOut.model_validate(r) for r in records],
        total=total,
    )


@router.get("/{record_id}", response_model=AttendanceOut)
async def get_record_endpoint(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get one record (ADMIN, or the employee it belongs to)"""
    record = attendance_service.get_record(db, record_id)
    ensure_self_or_admin(current_user, record.employee_id)
    return record


@router.put("/{record_id}", response_model=AttendanceOut)
async def update_record_endpoint(
    record_id: int,
    body: AttendanceUpdate,
    db: Session = Depends(get_db),
    tz: ZoneInfo = Depends(get_timezone),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Correct a record's timestamps or notes; hours are recomputed (ADMIN-only)"""
    return attendance_service.update_record(
        db, record_id, body, tz, current_user.subject, notes_max_length=settings.NOTES_MAX_LENGTH
    )


@router.delete("/{record_id}")
async def delete_record_endpoint(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Delete a record (ADMIN-only)"""
    attendance_service.delete_record(db, record_id, current_user.subject)
    return {"message": "Attendance record deleted", "record_id": record_id}
