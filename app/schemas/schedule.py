"""
Schedule schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.exceptions import ParseError
from app.utils.datetime_utils import parse_hhmm


class ScheduleUpsert(BaseModel):
    """Schema for creating or replacing an employee's schedule"""
    start_time: str = Field(..., description="Expected start (HH:MM, local)")
    end_time: str = Field(..., description="Expected end (HH:MM, local)")
    expected_hours: float = Field(..., ge=0, le=24, description="Expected daily hours")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        try:
            return parse_hhmm(v).strftime("%H:%M")
        except ParseError as exc:
            raise ValueError(exc.detail)


class EffectiveSchedule(BaseModel):
    """Expected schedule in force for an employee, configured or default"""
    start_time: str
    end_time: str
    expected_hours: float
    is_default: bool = False

    model_config = ConfigDict(frozen=True)


class ScheduleOut(BaseModel):
    """Schedule as returned by the schedule endpoints"""
    employee_id: int
    employee_name: Optional[str] = None
    start_time: str
    end_time: str
    expected_hours: float
    is_default: bool = False
    updated_at: Optional[datetime] = None
