"""
Schedule service - per-employee expected schedule maintenance
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.schedule import EmployeeSchedule
from app.schemas.schedule import ScheduleOut, ScheduleUpsert
from app.services.attendance_source import SqlAlchemyAttendanceSource
from app.services.audit_service import log_audit
from app.services.employee_service import get_employee
from app.services.schedule_resolver import ScheduleDefaults, resolve

logger = logging.getLogger(__name__)


def _to_out(row: EmployeeSchedule, employee_name: str = None) -> ScheduleOut:
    return ScheduleOut(
        employee_id=row.employee_id,
        employee_name=employee_name,
        start_time=row.start_time,
        end_time=row.end_time,
        expected_hours=row.expected_hours,
        is_default=False,
        updated_at=row.updated_at,
    )


def get_effective_schedule(db: Session, employee_id: int, defaults: ScheduleDefaults) -> ScheduleOut:
    """
    Schedule in force for an employee, defaults when none is configured

    Raises:
        NotFoundError: If the employee does not exist
    """
    employee = get_employee(db, employee_id)
    schedule = resolve(SqlAlchemyAttendanceSource(db), employee_id, defaults)
    return ScheduleOut(
        employee_id=employee.id,
        employee_name=employee.name,
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        expected_hours=schedule.expected_hours,
        is_default=schedule.is_default,
    )


def upsert_schedule(db: Session, employee_id: int, data: ScheduleUpsert, actor: str) -> ScheduleOut:
    """
    Create the employee's schedule, or replace it in place if one exists

    Raises:
        NotFoundError: If the employee does not exist
    """
    employee = get_employee(db, employee_id)
    row = db.query(EmployeeSchedule).filter(EmployeeSchedule.employee_id == employee_id).first()
    created = row is None
    if created:
        row = EmployeeSchedule(employee_id=employee_id)
        db.add(row)
    row.start_time = data.start_time
    row.end_time = data.end_time
    row.expected_hours = data.expected_hours
    db.commit()
    db.refresh(row)

    logger.info(
        "Schedule %s for employee %s: %s-%s (%sh)",
        "created" if created else "updated", employee_id, row.start_time, row.end_time, row.expected_hours,
    )
    log_audit(db, actor, "SCHEDULE_UPSERT", "employee_schedules", row.id, {
        "employee_id": employee_id,
        "created": created,
        **data.model_dump(),
    })
    return _to_out(row, employee.name)


def list_schedules(db: Session) -> List[ScheduleOut]:
    """Every configured schedule with the employee's name"""
    source = SqlAlchemyAttendanceSource(db)
    return [
        ScheduleOut(
            employee_id=employee.id,
            employee_name=employee.name,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            expected_hours=schedule.expected_hours,
        )
        for employee, schedule in source.list_schedules()
    ]


def delete_schedule(db: Session, employee_id: int, actor: str) -> None:
    """
    Remove a configured schedule; the employee falls back to defaults

    Raises:
        NotFoundError: If the employee has no configured schedule
    """
    row = db.query(EmployeeSchedule).filter(EmployeeSchedule.employee_id == employee_id).first()
    if row is None:
        raise NotFoundError(f"No schedule configured for employee {employee_id}")
    schedule_id = row.id
    db.delete(row)
    db.commit()
    logger.info("Schedule for employee %s deleted by %s", employee_id, actor)
    log_audit(db, actor, "SCHEDULE_DELETE", "employee_schedules", schedule_id, {"employee_id": employee_id})
