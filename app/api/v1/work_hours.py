"""
Worked-hours aggregate endpoints
"""
from datetime import date
from typing import Optional, Union
from fastapi import APIRouter, Depends, Query

from app.core.deps import (
    CurrentUser,
    ensure_self_or_admin,
    get_attendance_source,
    get_current_user,
    get_schedule_defaults,
    require_roles,
)
from app.models.employee import Role
from app.schemas.work_hours import DailyHours, HoursSummaryReport, MonthlyHours, WindowHours
from app.services import hours_aggregator
from app.services.attendance_source import SqlAlchemyAttendanceSource
from app.services.schedule_resolver import ScheduleDefaults

router = APIRouter()


@router.get("/daily/{employee_id}", response_model=DailyHours)
async def daily_hours_endpoint(
    employee_id: int,
    day: date = Query(..., alias="date", description="Calendar date (YYYY-MM-DD)"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Hours and completion counts for one day"""
    ensure_self_or_admin(current_user, employee_id)
    return hours_aggregator.aggregate_daily(source, employee_id, day)


@router.get("/weekly/{employee_id}", response_model=WindowHours)
async def weekly_hours_endpoint(
    employee_id: int,
    start_date: date = Query(..., description="First day (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Last day; defaults to start_date + 6 days"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Per-day breakdown, total and average over a week"""
    ensure_self_or_admin(current_user, employee_id)
    return hours_aggregator.aggregate_weekly(source, employee_id, start_date, defaults, end_date=end_date)


@router.get("/monthly/{employee_id}", response_model=MonthlyHours)
async def monthly_hours_endpoint(
    employee_id: int,
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., description="Month number 1-12"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Month total with "Week N" buckets by day of month"""
    ensure_self_or_admin(current_user, employee_id)
    return hours_aggregator.aggregate_monthly(source, employee_id, year, month, defaults)


@router.get("/summary", response_model=HoursSummaryReport)
async def hours_summary_endpoint(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    period_type: Optional[str] = Query("custom", description="Label echoed back, e.g. week or month"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Hours, variance and compliance for every active employee (ADMIN-only)"""
    return hours_aggregator.summarize_all(source, start_date, end_date, defaults, period_type=period_type)


@router.get("/window/{employee_id}", response_model=Union[DailyHours, MonthlyHours, WindowHours])
async def window_hours_endpoint(
    employee_id: int,
    start_date: date = Query(..., description="First day (YYYY-MM-DD); for monthly, any day in the month"),
    granularity: str = Query("weekly", description="daily, weekly or monthly"),
    end_date: Optional[date] = Query(None, description="Last day for weekly windows"),
    source: SqlAlchemyAttendanceSource = Depends(get_attendance_source),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Aggregate at the requested granularity. Unknown granularity => 400."""
    ensure_self_or_admin(current_user, employee_id)
    return hours_aggregator.aggregate_window(
        source, employee_id, start_date, granularity, defaults, end_date=end_date
    )
