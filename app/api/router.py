"""
Main API router
"""
from fastapi import APIRouter

from app.api.v1 import (
    health,
    version,
    employees,
    attendance,
    schedules,
    work_hours,
    reports,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(work_hours.router, prefix="/work-hours", tags=["work-hours"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
