"""
Attendance schemas (clock flows, manual corrections and the engine's record view)
"""
from datetime import datetime
from typing import Optional, List, Literal
from pydantic import BaseModel, ConfigDict, Field


class ClockInRequest(BaseModel):
    """Schema for clock-in request"""
    employee_id: int = Field(..., description="Employee clocking in")


class ClockOutRequest(BaseModel):
    """Schema for clock-out request"""
    employee_id: int = Field(..., description="Employee clocking out")
    notes: Optional[str] = Field(None, description="Free text, trimmed and capped at 500 characters")


class ScanRequest(BaseModel):
    """QR badge scan; toggles between clock-in and clock-out"""
    employee_code: str = Field(..., min_length=1, description="Code encoded in the employee's badge")
    notes: Optional[str] = Field(None, description="Notes applied when the scan clocks out")


class ManualAttendanceCreate(BaseModel):
    """Administrator-entered attendance record (correction path)"""
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None
    notes: Optional[str] = None


class AttendanceUpdate(BaseModel):
    """Administrator edit of an existing record; omitted fields are kept"""
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    notes: Optional[str] = None


class AttendanceOut(BaseModel):
    """Schema for attendance output. Datetimes are local wall-clock times."""
    id: int
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None
    hours_worked: Optional[float] = None
    net_hours_worked: Optional[float] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AttendanceStatusOut(BaseModel):
    """Whether the employee currently has an open record"""
    employee_id: int
    clocked_in: bool
    record: Optional[AttendanceOut] = None


class ScanResult(BaseModel):
    """Outcome of a badge scan"""
    action: Literal["clock_in", "clock_out"]
    employee_id: int
    employee_name: str
    record: AttendanceOut


class AttendanceListResponse(BaseModel):
    """Schema for attendance list response"""
    items: List[AttendanceOut]
    total: int


class AttendanceEntry(BaseModel):
    """Immutable attendance row as consumed by the computation engine"""
    id: int
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None
    hours_worked: Optional[float] = None
    notes: Optional[str] = None
    employee_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def is_complete(self) -> bool:
        return self.clock_out is not None
