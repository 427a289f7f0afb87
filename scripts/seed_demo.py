"""
Seed a few demo employees with schedules and a week of attendance.
Existing employees (matched by employee_code) are left unchanged. Run from the
project root with .env loaded.

Usage:
  python scripts/seed_demo.py               # week starting last Monday
  python scripts/seed_demo.py 2025-11-24    # week starting on the given Monday
"""
import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.db.session import SessionLocal, init_sqlite_schema  # noqa: E402
from app.models import AttendanceRecord, Employee, EmployeeSchedule  # noqa: E402
from app.services.status_classifier import compute_hours  # noqa: E402
from app.utils.datetime_utils import parse_date  # noqa: E402

# code, name, username, schedule (start, end, hours) or None for defaults,
# daily (clock-in, clock-out) pairs Monday to Friday; None means absent
DEMO = [
    ("EMP001", "Ada Lovelace", "ada", ("09:00", "17:00", 8.0),
     [("09:00", "17:30"), ("09:20", "16:00"), ("08:55", "17:05"), None, ("09:00", None)]),
    ("EMP002", "Alan Turing", "alan", ("07:00", "15:00", 8.0),
     [("07:05", "15:00"), ("06:58", "16:30"), None, ("07:00", "15:00"), ("07:30", "14:00")]),
    ("EMP003", "Grace Hopper", "grace", None,
     [("09:00", "17:00"), ("09:00", "17:00"), ("09:00", "17:00"), ("09:00", "17:00"), ("09:00", "17:00")]),
]


def _at(day: date, hhmm: str) -> datetime:
    hour, minute = (int(p) for p in hhmm.split(":"))
    return datetime.combine(day, time(hour, minute))


def main():
    if len(sys.argv) > 1:
        monday = parse_date(sys.argv[1])
    else:
        today = date.today()
        monday = today - timedelta(days=today.weekday() + 7)

    init_sqlite_schema()
    db = SessionLocal()
    try:
        for code, name, username, schedule, days in DEMO:
            if db.query(Employee).filter(Employee.employee_code == code).first():
                print(f"{code} already exists, skipping")
                continue
            employee = Employee(employee_code=code, name=name, username=username, active=True)
            db.add(employee)
            db.flush()
            if schedule:
                start, end, hours = schedule
                db.add(EmployeeSchedule(
                    employee_id=employee.id, start_time=start, end_time=end, expected_hours=hours,
                ))
            for offset, punches in enumerate(days):
                if punches is None:
                    continue
                day = monday + timedelta(days=offset)
                clock_in = _at(day, punches[0])
                clock_out = _at(day, punches[1]) if punches[1] else None
                db.add(AttendanceRecord(
                    employee_id=employee.id,
                    clock_in=clock_in,
                    clock_out=clock_out,
                    hours_worked=compute_hours(clock_in, clock_out) if clock_out else None,
                ))
            db.commit()
            print(f"Seeded {code} {name} (id={employee.id})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
