"""
Employee schedule endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import (
    CurrentUser,
    ensure_self_or_admin,
    get_current_user,
    get_db,
    get_schedule_defaults,
    require_roles,
)
from app.models.employee import Role
from app.schemas.schedule import ScheduleOut, ScheduleUpsert
from app.services.schedule_resolver import ScheduleDefaults
from app.services.schedule_service import (
    delete_schedule,
    get_effective_schedule,
    list_schedules,
    upsert_schedule,
)

router = APIRouter()


@router.get("", response_model=List[ScheduleOut])
async def list_schedules_endpoint(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """All configured schedules (employees on defaults are not listed)"""
    return list_schedules(db)


@router.get("/{employee_id}", response_model=ScheduleOut)
async def get_schedule_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    defaults: ScheduleDefaults = Depends(get_schedule_defaults),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Effective schedule; is_default=true when the system default applies"""
    ensure_self_or_admin(current_user, employee_id)
    return get_effective_schedule(db, employee_id, defaults)


@router.put("/{employee_id}", response_model=ScheduleOut)
async def upsert_schedule_endpoint(
    employee_id: int,
    body: ScheduleUpsert,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Create or replace the employee's schedule (ADMIN-only)"""
    return upsert_schedule(db, employee_id, body, current_user.subject)


@router.delete("/{employee_id}")
async def delete_schedule_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Remove the configured schedule; the employee reverts to defaults"""
    delete_schedule(db, employee_id, current_user.subject)
    return {"message": "Schedule deleted", "employee_id": employee_id}
