"""
Reports and exports endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import (
    CurrentUser,
    ensure_self_or_admin,
    get_attendance_source,
    get_current_user,
    get_db,
    get_schedule_defaults,
    require_roles,
)
from app.models.employee import Role
from app.schemas.reports import ComplianceReport, EmployeePayroll, ExceptionReport, PayrollReport
from app.services import exception_detector, payroll_service, schedule_compliance
from app.services.attendance_source import SqlAlchemyAttendanceSource
from app.services.audit_service import log_audit
from app.services.schedule_resolver import ScheduleDefaults
from app.utils.csv_export import stream_csv

router = APIRouter()


@router.get("/schedule-comparison/{employee_id}", response_model=ComplianceReport)
async def schedule_comparison_endpoint(
    employee_id: int,
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Actual vs expected start, end and hours for each completed record.

    On-time here means at or before the expected start.
    """
    ensure_self_or_admin(current_user, employee_id)
    return schedule_compliance.compare(source, employee_id, start_date, end_date, defaults)


@router.get("/exceptions", response_model=ExceptionReport)
async def exceptions_endpoint(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    employee_id: Optional[int] = Query(None, description="Restrict to one employee"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Missing clock-outs and absent weekdays (ADMIN-only)"""
    return exception_detector.detect(source, start_date, end_date, employee_id=employee_id)


@router.get("/exceptions.csv")
async def export_exceptions_csv(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    employee_id: Optional[int] = Query(None, description="Restrict to one employee"),
    db: Session = Depends(get_db),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Export the exception report as CSV, one row per issue"""
    report = exception_detector.detect(source, start_date, end_date, employee_id=employee_id)

    rows = [
        {
            "issue_type": issue.issue_type,
            "severity": issue.severity,
            "employee_id": issue.employee_id,
            "employee_name": issue.employee_name,
            "date": issue.work_date.isoformat(),
            "record_id": issue.record_id,
            "description": issue.description,
        }
        for issue in report.incomplete_records
    ] + [
        {
            "issue_type": issue.issue_type,
            "severity": issue.severity,
            "employee_id": issue.employee_id,
            "employee_name": issue.employee_name,
            "date": issue.missing_date.isoformat(),
            "record_id": "",
            "description": issue.description,
        }
        for issue in report.missing_days
    ]

    log_audit(
        db=db,
        actor=current_user.subject,
        action="REPORT_EXPORT",
        entity_type="report",
        meta={
            "report_type": "exceptions",
            "start_date": start_date,
            "end_date": end_date,
            "employee_id": employee_id,
            "row_count": len(rows),
        },
    )

    headers = ["issue_type", "severity", "employee_id", "employee_name", "date", "record_id", "description"]
    filename = f"exceptions_{start_date.strftime('%Y%m%d')}_{end_date.strftime('%Y%m%d')}.csv"
    return stream_csv(headers=headers, rows=rows, filename=filename)


@router.get("/payroll", response_model=PayrollReport)
async def payroll_endpoint(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    hourly_rate: float = Query(..., description="Pay per hour"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Payroll for every active employee with attendance rates and totals (ADMIN-only)"""
    return payroll_service.summarize_all(source, start_date, end_date, hourly_rate, defaults)


@router.get("/payroll.csv")
async def export_payroll_csv(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    hourly_rate: float = Query(..., description="Pay per hour"),
    db: Session = Depends(get_db),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Export the all-employee payroll as CSV, one row per employee"""
    report = payroll_service.summarize_all(source, start_date, end_date, hourly_rate, defaults)
    headers = [
        "employee_code",
        "employee_name",
        "days_worked",
        "total_hours",
        "hourly_rate",
        "payroll_amount",
        "late_count",
        "overtime_hours",
        "undertime_hours",
        "expected_work_days",
        "actual_work_days",
        "missing_days",
        "attendance_rate",
    ]
    rows = [line.model_dump(include=set(headers)) for line in report.employees]

    log_audit(
        db=db,
        actor=current_user.subject,
        action="REPORT_EXPORT",
        entity_type="report",
        meta={
            "report_type": "payroll",
            "start_date": start_date,
            "end_date": end_date,
            "hourly_rate": hourly_rate,
            "row_count": len(rows),
        },
    )

    filename = f"payroll_{start_date.strftime('%Y%m%d')}_{end_date.strftime('%Y%m%d')}.csv"
    return stream_csv(headers=headers, rows=rows, filename=filename)


@router.get("/payroll/{employee_id}", response_model=EmployeePayroll)
async def employee_payroll_endpoint(
    employee_id: int,
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    hourly_rate: float = Query(..., description="Pay per hour"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Payroll with per-day breakdown for one employee"""
    ensure_self_or_admin(current_user, employee_id)
    return payroll_service.summarize_one(source, employee_id, start_date, end_date, hourly_rate, defaults)
