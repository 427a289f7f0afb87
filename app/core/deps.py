"""
Dependencies and guards for FastAPI endpoints
"""
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import decode_token
from app.db.session import get_db
from app.models.employee import Role
from app.services.attendance_source import SqlAlchemyAttendanceSource
from app.services.schedule_resolver import ScheduleDefaults


security = HTTPBearer()


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller as described by the bearer token claims"""
    subject: str
    role: Role
    employee_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def _unauthorized(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """
    Get current authenticated caller from JWT token

    Claims: "sub" (employee id or admin name) and "role" (ADMIN or EMPLOYEE).
    Employee callers must carry a numeric "sub".
    """
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise _unauthorized()

    sub_value = payload.get("sub")
    if sub_value is None:
        raise _unauthorized()

    try:
        role = Role(str(payload.get("role", Role.EMPLOYEE.value)).upper())
    except ValueError:
        raise _unauthorized("Unknown role")

    employee_id: Optional[int] = None
    try:
        employee_id = int(sub_value)
    except (TypeError, ValueError):
        if role != Role.ADMIN:
            raise _unauthorized()

    return CurrentUser(subject=str(sub_value), role=role, employee_id=employee_id)


def require_roles(*allowed_roles: Role):
    """
    Dependency factory for role-based access control

    Usage:
        @router.get("/admin-only")
        async def admin_endpoint(user: CurrentUser = Depends(require_roles(Role.ADMIN))):
            ...
    """
    def role_checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {[r.value for r in allowed_roles]}"
            )
        return current_user
    return role_checker


def ensure_self_or_admin(current_user: CurrentUser, employee_id: int) -> None:
    """Raise 403 unless the caller is an admin or the employee in question"""
    if current_user.is_admin:
        return
    if current_user.employee_id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Employees may only access their own attendance"
        )


def get_timezone() -> ZoneInfo:
    """Attendance calendar timezone"""
    return settings.get_timezone()


def get_schedule_defaults() -> ScheduleDefaults:
    """System-wide default schedule built from settings"""
    return ScheduleDefaults.from_settings(settings)


def get_attendance_source(db: Session = Depends(get_db)) -> SqlAlchemyAttendanceSource:
    """Read-side data source for the computation engine"""
    return SqlAlchemyAttendanceSource(db)
