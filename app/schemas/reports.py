"""
Report schemas: schedule compliance, exceptions and payroll
"""
from datetime import date, datetime
from typing import List, Literal
from pydantic import BaseModel

from app.schemas.schedule import EffectiveSchedule


# --- Schedule compliance ---


class ComplianceDay(BaseModel):
    """Actual vs expected for one completed record"""
    work_date: date
    record_id: int
    expected_start: str
    expected_end: str
    expected_hours: float
    actual_start: str
    actual_end: str
    actual_hours: float
    start_variance_minutes: int
    hours_variance: float
    on_time: bool
    meets_expected_hours: bool
    overall_compliant: bool


class ComplianceSummary(BaseModel):
    total_days: int
    on_time_days: int
    meets_hours_days: int
    full_compliance_days: int
    on_time_percentage: int
    meets_hours_percentage: int
    full_compliance_percentage: int
    average_start_variance_minutes: int
    average_hours_variance: float


class ComplianceReport(BaseModel):
    employee_id: int
    employee_name: str
    start_date: date
    end_date: date
    schedule: EffectiveSchedule
    summary: ComplianceSummary
    days: List[ComplianceDay]


# --- Exceptions ---


class IncompleteRecordIssue(BaseModel):
    record_id: int
    employee_id: int
    employee_name: str
    clock_in: datetime
    work_date: date
    issue_type: Literal["missing_clock_out"] = "missing_clock_out"
    severity: Literal["high"] = "high"
    description: str


class MissingDayIssue(BaseModel):
    employee_id: int
    employee_name: str
    missing_date: date
    day_of_week: str
    issue_type: Literal["absent"] = "absent"
    severity: Literal["medium"] = "medium"
    description: str


class ExceptionSummary(BaseModel):
    expected_work_days: int
    total_incomplete_records: int
    total_missing_days: int
    employees_with_issues: int


class ExceptionReport(BaseModel):
    start_date: date
    end_date: date
    summary: ExceptionSummary
    incomplete_records: List[IncompleteRecordIssue]
    missing_days: List[MissingDayIssue]


# --- Payroll ---


class PayrollDay(BaseModel):
    work_date: date
    hours: float
    records: int
    incomplete_records: int
    late_count: int
    overtime_hours: float
    undertime_hours: float
    amount: float


class EmployeePayroll(BaseModel):
    employee_id: int
    employee_code: str
    employee_name: str
    start_date: date
    end_date: date
    hourly_rate: float
    total_hours: float
    payroll_amount: float
    days_worked: int
    late_count: int
    overtime_hours: float
    undertime_hours: float
    daily_breakdown: List[PayrollDay]


class EmployeePayrollLine(EmployeePayroll):
    expected_work_days: int
    actual_work_days: int
    missing_days: int
    attendance_rate: int


class PayrollTotals(BaseModel):
    employees: int
    total_hours: float
    total_payroll: float
    total_missing_days: int
    average_attendance_rate: int


class PayrollReport(BaseModel):
    start_date: date
    end_date: date
    hourly_rate: float
    expected_work_days: int
    totals: PayrollTotals
    employees: List[EmployeePayrollLine]
