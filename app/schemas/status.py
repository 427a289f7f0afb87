"""
Attendance-status schemas (per-record classification and roll-ups)
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from app.schemas.attendance import AttendanceEntry
from app.schemas.schedule import EffectiveSchedule


class StatusResult(BaseModel):
    """Late/undertime/overtime verdict for one attendance record"""
    clock_in_time: str
    hours_worked: float = 0.0
    is_incomplete: bool = False
    is_late: bool = False
    late_minutes: int = 0
    is_undertime: bool = False
    undertime_hours: float = 0.0
    is_overtime: bool = False
    overtime_hours: float = 0.0

    model_config = ConfigDict(frozen=True)


class AnnotatedRecord(BaseModel):
    """An attendance record paired with its status and the schedule it was judged against"""
    record: AttendanceEntry
    status: StatusResult
    schedule: Optional[EffectiveSchedule] = None

    model_config = ConfigDict(frozen=True)


class StatusTotals(BaseModel):
    total_records: int = 0
    late_count: int = 0
    undertime_count: int = 0
    overtime_count: int = 0
    total_late_minutes: int = 0
    total_undertime_hours: float = 0.0
    total_overtime_hours: float = 0.0


class StatusReport(BaseModel):
    """Per-employee attendance-status report over a date range"""
    employee_id: int
    employee_name: str
    start_date: date
    end_date: date
    schedule: EffectiveSchedule
    summary: StatusTotals
    records: List[AnnotatedRecord]


class DetectionReport(BaseModel):
    """Organisation-wide late/undertime/overtime detection over completed records"""
    start_date: date
    end_date: date
    summary: StatusTotals
    late: List[AnnotatedRecord]
    undertime: List[AnnotatedRecord]
    overtime: List[AnnotatedRecord]
