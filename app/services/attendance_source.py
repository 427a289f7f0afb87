"""
Read-side access to employees, schedules and attendance for the computation engine.

The engine only depends on the AttendanceSource protocol; SqlAlchemyAttendanceSource
is the production implementation and tests substitute an in-memory one.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Protocol, Sequence, Tuple

from sqlalchemy.orm import Session

from app.models.attendance import AttendanceRecord
from app.models.employee import Employee
from app.models.schedule import EmployeeSchedule
from app.schemas.attendance import AttendanceEntry
from app.schemas.employee import EmployeeRef
from app.schemas.schedule import EffectiveSchedule

logger = logging.getLogger(__name__)


class AttendanceSource(Protocol):
    def get_employee(self, employee_id: int) -> Optional[EmployeeRef]:
        raise NotImplementedError

    def get_schedule(self, employee_id: int) -> Optional[EffectiveSchedule]:
        raise NotImplementedError

    def list_schedules(self) -> Sequence[Tuple[EmployeeRef, EffectiveSchedule]]:
        """(employee, schedule) pairs for every configured schedule"""
        raise NotImplementedError

    def list_active_employees(self) -> Sequence[EmployeeRef]:
        raise NotImplementedError

    def list_attendance(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        completed_only: bool = False,
    ) -> Sequence[AttendanceEntry]:
        """Records whose clock-in calendar date lies in [start, end], ordered by clock_in."""

        raise NotImplementedError


def _to_entry(record: AttendanceRecord, employee_name: Optional[str] = None) -> AttendanceEntry:
    return AttendanceEntry(
        id=record.id,
        employee_id=record.employee_id,
        clock_in=record.clock_in,
        clock_out=record.clock_out,
        hours_worked=record.hours_worked,
        notes=record.notes,
        employee_name=employee_name,
    )


def _to_schedule(row: EmployeeSchedule) -> EffectiveSchedule:
    return EffectiveSchedule(
        start_time=row.start_time,
        end_time=row.end_time,
        expected_hours=row.expected_hours,
        is_default=False,
    )


class SqlAlchemyAttendanceSource:
    """AttendanceSource backed by the application database"""

    def __init__(self, db: Session):
        self.db = db

    def get_employee(self, employee_id: int) -> Optional[EmployeeRef]:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        return EmployeeRef.model_validate(employee) if employee else None

    def get_schedule(self, employee_id: int) -> Optional[EffectiveSchedule]:
        row = self.db.query(EmployeeSchedule).filter(EmployeeSchedule.employee_id == employee_id).first()
        return _to_schedule(row) if row else None

    def list_schedules(self) -> List[Tuple[EmployeeRef, EffectiveSchedule]]:
        """(employee, schedule) pairs for every configured schedule"""
        rows = (
            self.db.query(EmployeeSchedule, Employee)
            .join(Employee, Employee.id == EmployeeSchedule.employee_id)
            .order_by(Employee.name)
            .all()
        )
        return [(EmployeeRef.model_validate(emp), _to_schedule(sched)) for sched, emp in rows]

    def list_active_employees(self) -> List[EmployeeRef]:
        employees = (
            self.db.query(Employee)
            .filter(Employee.active.is_(True))
            .order_by(Employee.name, Employee.id)
            .all()
        )
        return [EmployeeRef.model_validate(e) for e in employees]

    def list_attendance(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        completed_only: bool = False,
    ) -> List[AttendanceEntry]:
        query = self.db.query(AttendanceRecord, Employee.name).join(
            Employee, Employee.id == AttendanceRecord.employee_id
        )
        if employee_id is not None:
            query = query.filter(AttendanceRecord.employee_id == employee_id)
        if start is not None:
            query = query.filter(AttendanceRecord.clock_in >= datetime.combine(start, time.min))
        if end is not None:
            query = query.filter(AttendanceRecord.clock_in < datetime.combine(end + timedelta(days=1), time.min))
        if completed_only:
            query = query.filter(AttendanceRecord.clock_out.isnot(None))

        rows = query.order_by(AttendanceRecord.clock_in, AttendanceRecord.id).all()
        logger.debug(
            "list_attendance employee_id=%s start=%s end=%s -> %d rows",
            employee_id, start, end, len(rows),
        )
        return [_to_entry(record, name) for record, name in rows]
