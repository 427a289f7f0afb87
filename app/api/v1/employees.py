"""
Employee management endpoints (ADMIN, except reading one's own record)
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import CurrentUser, ensure_self_or_admin, get_current_user, get_db, require_roles
from app.models.employee import Role
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from app.services.employee_service import (
    create_employee,
    delete_employee,
    get_employee,
    list_employees,
    set_active,
    update_employee,
)

router = APIRouter()


@router.get("", response_model=List[EmployeeOut])
async def list_employees_endpoint(
    include_inactive: bool = Query(False, description="Include deactivated employees"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """List employees (active only unless include_inactive)"""
    return list_employees(db, include_inactive=include_inactive)


@router.post("", response_model=EmployeeOut, status_code=201)
async def create_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Create a new employee (ADMIN-only)"""
    return create_employee(db, employee_data, current_user.subject)


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get one employee (ADMIN, or the employee themself)"""
    ensure_self_or_admin(current_user, employee_id)
    return get_employee(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeOut)
async def update_employee_endpoint(
    employee_id: int,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Update name and/or username (ADMIN-only)"""
    return update_employee(db, employee_id, employee_data, current_user.subject)


@router.post("/{employee_id}/deactivate", response_model=EmployeeOut)
async def deactivate_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Deactivate an employee; deactivated employees cannot clock in"""
    return set_active(db, employee_id, False, current_user.subject)


@router.post("/{employee_id}/activate", response_model=EmployeeOut)
async def activate_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Re-activate an employee"""
    return set_active(db, employee_id, True, current_user.subject)


@router.delete("/{employee_id}")
async def delete_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
):
    """Permanently delete an employee with their schedule and attendance (ADMIN-only)"""
    delete_employee(db, employee_id, current_user.subject)
    return {"message": "Employee deleted", "employee_id": employee_id}
