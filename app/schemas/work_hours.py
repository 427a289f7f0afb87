"""
Work-hours aggregate schemas
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel

from app.schemas.attendance import AttendanceEntry


class DailyHours(BaseModel):
    employee_id: int
    work_date: date
    total_hours: float
    total_records: int
    completed_records: int
    incomplete_records: int
    records: List[AttendanceEntry]


class DayBreakdown(BaseModel):
    work_date: date
    total_hours: float
    records_count: int
    incomplete_count: int


class WeekBucket(BaseModel):
    """Calendar-day bucket: days 1-7 are Week 1, 8-14 Week 2, and so on"""
    week: str
    days: int
    hours: float


class WindowHours(BaseModel):
    """Totals over a date window, with variance against the employee's schedule"""
    employee_id: int
    start_date: date
    end_date: date
    total_hours: float
    days_worked: int
    avg_hours_per_day: float
    expected_hours_per_day: float
    expected_total_hours: float
    hours_variance: float
    daily_breakdown: List[DayBreakdown]


class MonthlyHours(WindowHours):
    year: int
    month: int
    month_name: str
    weekly_summary: List[WeekBucket]


class EmployeeHoursSummary(BaseModel):
    employee_id: int
    employee_code: str
    employee_name: str
    days_worked: int
    total_hours: float
    avg_hours_per_day: float
    incomplete_records: int
    expected_hours_per_day: float
    expected_total_hours: float
    hours_variance: float
    compliance_percentage: int


class HoursSummaryReport(BaseModel):
    start_date: date
    end_date: date
    period_type: Optional[str] = "custom"
    employees: List[EmployeeHoursSummary]
