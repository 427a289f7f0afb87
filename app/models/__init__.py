"""
Database models
"""
from app.models.employee import Employee, Role
from app.models.attendance import AttendanceRecord
from app.models.schedule import EmployeeSchedule
from app.models.audit_log import AuditLog

__all__ = [
    "Employee",
    "Role",
    "AttendanceRecord",
    "EmployeeSchedule",
    "AuditLog",
]
