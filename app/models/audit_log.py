"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from app.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor = Column(String(100), nullable=False)  # Token subject of the caller
    action = Column(String, nullable=False)  # e.g. "ATTENDANCE_MANUAL_CREATE", "SCHEDULE_UPSERT"
    entity_type = Column(String, nullable=False)  # e.g. "attendance_records", "employee_schedules"
    entity_id = Column(Integer, nullable=True)
    meta_json = Column(JSON, nullable=True)
    # Set explicitly by log_audit; SQLite server defaults are unreliable for timezone-aware columns
    created_at = Column(DateTime(timezone=True), nullable=False)
