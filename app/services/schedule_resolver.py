"""
Effective schedule lookup with configured fallback
"""
import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from app.schemas.schedule import EffectiveSchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleDefaults:
    """System-wide schedule applied to employees without a configured one"""
    start_time: str = "09:00"
    end_time: str = "17:00"
    expected_hours: float = 8.0

    @classmethod
    def from_settings(cls, settings) -> "ScheduleDefaults":
        return cls(
            start_time=settings.DEFAULT_START_TIME,
            end_time=settings.DEFAULT_END_TIME,
            expected_hours=settings.DEFAULT_EXPECTED_HOURS,
        )

    def as_schedule(self) -> EffectiveSchedule:
        return EffectiveSchedule(
            start_time=self.start_time,
            end_time=self.end_time,
            expected_hours=self.expected_hours,
            is_default=True,
        )


def resolve(source, employee_id: int, defaults: ScheduleDefaults) -> EffectiveSchedule:
    """
    Return the schedule in force for an employee.

    An employee without a configured schedule gets the defaults; nothing is
    persisted and no error is raised. Employee existence is not checked here.

    Args:
        source: AttendanceSource to read the schedule from
        employee_id: Employee to resolve
        defaults: Fallback schedule

    Returns:
        EffectiveSchedule (is_default=True when the fallback applied)
    """
    schedule = source.get_schedule(employee_id)
    if schedule is None:
        logger.debug("No schedule for employee %s, using defaults", employee_id)
        return defaults.as_schedule()
    return schedule


def load_schedules(source) -> Dict[int, EffectiveSchedule]:
    """All configured schedules keyed by employee id, read in one pass"""
    return {employee.id: schedule for employee, schedule in source.list_schedules()}


def resolve_from(
    schedules: Mapping[int, EffectiveSchedule],
    employee_id: int,
    defaults: ScheduleDefaults,
) -> EffectiveSchedule:
    """resolve() against schedules preloaded with load_schedules"""
    schedule = schedules.get(employee_id)
    return schedule if schedule is not None else defaults.as_schedule()
