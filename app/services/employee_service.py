"""
Employee service - business logic for employee records
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeUpdate
from app.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def get_employee(db: Session, employee_id: int) -> Employee:
    """
    Get an employee by ID

    Raises:
        NotFoundError: If no such employee exists
    """
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return employee


def get_employee_by_code(db: Session, employee_code: str) -> Employee:
    """
    Get an employee by badge code

    Raises:
        NotFoundError: If no employee carries this code
    """
    employee = db.query(Employee).filter(Employee.employee_code == employee_code.strip()).first()
    if employee is None:
        raise NotFoundError(f"Employee with code '{employee_code}' not found")
    return employee


def list_employees(db: Session, include_inactive: bool = False) -> List[Employee]:
    """List employees ordered by name; active only unless include_inactive"""
    query = db.query(Employee)
    if not include_inactive:
        query = query.filter(Employee.active.is_(True))
    return query.order_by(Employee.name, Employee.id).all()


def create_employee(db: Session, data: EmployeeCreate, actor: str) -> Employee:
    """
    Create a new employee

    Raises:
        ConflictError: If employee_code or username is already taken
    """
    if db.query(Employee).filter(Employee.employee_code == data.employee_code).first():
        raise ConflictError(f"Employee with code '{data.employee_code}' already exists")
    if db.query(Employee).filter(Employee.username == data.username).first():
        raise ConflictError(f"Username '{data.username}' is already taken")

    employee = Employee(
        employee_code=data.employee_code,
        name=data.name,
        username=data.username,
        active=data.active,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)

    logger.info("Employee %s (%s) created by %s", employee.id, employee.employee_code, actor)
    log_audit(
        db=db,
        actor=actor,
        action="EMPLOYEE_CREATE",
        entity_type="employees",
        entity_id=employee.id,
        meta=data.model_dump(),
    )
    return employee


def update_employee(db: Session, employee_id: int, data: EmployeeUpdate, actor: str) -> Employee:
    """
    Update name and/or username

    Raises:
        ValidationError: If neither field is supplied
        NotFoundError: If the employee does not exist
        ConflictError: If the new username belongs to another employee
    """
    if data.name is None and data.username is None:
        raise ValidationError("At least one field (name or username) is required")

    employee = get_employee(db, employee_id)
    changes = {}
    if data.username is not None and data.username != employee.username:
        taken = db.query(Employee).filter(
            Employee.username == data.username,
            Employee.id != employee_id,
        ).first()
        if taken:
            raise ConflictError(f"Username '{data.username}' is already taken")
        changes["username"] = {"old": employee.username, "new": data.username}
        employee.username = data.username
    if data.name is not None and data.name != employee.name:
        changes["name"] = {"old": employee.name, "new": data.name}
        employee.name = data.name

    db.commit()
    db.refresh(employee)
    if changes:
        log_audit(db, actor, "EMPLOYEE_UPDATE", "employees", employee.id, changes)
    return employee


def set_active(db: Session, employee_id: int, active: bool, actor: str) -> Employee:
    """
    Activate or deactivate an employee

    Raises:
        NotFoundError: If the employee does not exist
        ValidationError: If the employee is already in the requested state
    """
    employee = get_employee(db, employee_id)
    if employee.active == active:
        state = "active" if active else "inactive"
        raise ValidationError(f"Employee is already {state}")

    employee.active = active
    db.commit()
    db.refresh(employee)

    action = "EMPLOYEE_ACTIVATE" if active else "EMPLOYEE_DEACTIVATE"
    logger.info("%s employee=%s by %s", action, employee.id, actor)
    log_audit(db, actor, action, "employees", employee.id, {"employee_code": employee.employee_code})
    return employee


def delete_employee(db: Session, employee_id: int, actor: str) -> None:
    """
    Hard-delete an employee together with their schedule and attendance

    Raises:
        NotFoundError: If the employee does not exist
    """
    employee = get_employee(db, employee_id)
    meta = {
        "employee_code": employee.employee_code,
        "name": employee.name,
        "attendance_records": len(employee.attendance_records),
    }
    db.delete(employee)
    db.commit()

    logger.info("Employee %s deleted by %s", employee_id, actor)
    log_audit(db, actor, "EMPLOYEE_DELETE", "employees", employee_id, meta)
