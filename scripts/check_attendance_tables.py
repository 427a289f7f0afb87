#!/usr/bin/env python3
"""
Check that the attendance tables exist and report row counts.
Uses the same DATABASE_URL as the app (from app.core.config.settings).
Run from project root: python scripts/check_attendance_tables.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import create_engine, inspect, text  # noqa: E402

from app.core.config import settings  # noqa: E402

TABLES = ("employees", "employee_schedules", "attendance_records", "audit_logs")


def main() -> int:
    url = settings.DATABASE_URL
    print(f"DATABASE_URL: {url if url.startswith('sqlite') else url.split('@')[-1]}")
    engine = create_engine(url)

    existing = set(inspect(engine).get_table_names())
    missing = [name for name in TABLES if name not in existing]

    with engine.connect() as conn:
        for name in TABLES:
            if name in existing:
                count = conn.execute(text(f"SELECT COUNT(*) FROM {name}")).scalar()
                print(f"{name:<20} exists ({count} rows)")
            else:
                print(f"{name:<20} MISSING")

    if missing:
        print("Run: alembic upgrade head", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
