"""
Attendance record model
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, String, Float, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    clock_in = Column(DateTime, nullable=False, index=True)  # Local wall-clock time (ATTENDANCE_TIMEZONE)
    clock_out = Column(DateTime, nullable=True)  # Null while the record is open
    hours_worked = Column(Float, nullable=True)  # Set at clock-out, 2 decimals
    net_hours_worked = Column(Float, nullable=True)  # Reserved for break deduction; never computed
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        Index("ix_attendance_records_employee_clock_in", "employee_id", "clock_in"),
        # At most one open record per employee
        Index(
            "uq_attendance_open_per_employee",
            "employee_id",
            unique=True,
            sqlite_where=text("clock_out IS NULL"),
            postgresql_where=text("clock_out IS NULL"),
        ),
    )

    # Relationships
    employee = relationship("Employee", back_populates="attendance_records")

    @property
    def is_open(self) -> bool:
        return self.clock_out is None
