"""
Employee schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Value cannot be empty")
    return v


class EmployeeCreate(BaseModel):
    """Schema for creating an employee"""
    employee_code: str = Field(..., max_length=50, description="Employee code (unique, printed on the QR badge)")
    name: str = Field(..., max_length=200, description="Employee name")
    username: str = Field(..., max_length=100, description="Login name (unique)")
    active: bool = Field(default=True, description="Employee active status")

    @field_validator("employee_code", "name", "username")
    @classmethod
    def strip_values(cls, v: str) -> str:
        return _strip_required(v)


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee; at least one field is required"""
    name: Optional[str] = Field(None, max_length=200, description="Employee name")
    username: Optional[str] = Field(None, max_length=100, description="Login name (unique)")

    @field_validator("name", "username")
    @classmethod
    def strip_values(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return _strip_required(v)


class EmployeeOut(BaseModel):
    """Schema for employee output"""
    id: int
    employee_code: str
    name: str
    username: str
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EmployeeRef(BaseModel):
    """Minimal immutable employee view handed to the computation engine"""
    id: int
    employee_code: str
    name: str
    active: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)
