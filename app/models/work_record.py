"""
Work record model: one employee's attendance for one calendar day
"""
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, String, Numeric, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class ApprovalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WorkRecord(Base):
    __tablename__ = "work_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    work_date = Column(Date, nullable=False, index=True)  # Business-zone calendar day
    clock_in_time = Column(DateTime(timezone=True), nullable=True)  # UTC; null for leave days
    clock_out_time = Column(DateTime(timezone=True), nullable=True)
    hours_worked = Column(Numeric(6, 2), nullable=False, default=0)
    is_leave = Column(Boolean, nullable=False, default=False)
    leave_type = Column(String, nullable=True)
    site_id = Column(Integer, ForeignKey("sites.id"), nullable=True)
    location_id = Column(Integer, ForeignKey("employee_locations.id"), nullable=True)
    clock_in_lat = Column(Numeric(10, 8), nullable=True)
    clock_in_lng = Column(Numeric(11, 8), nullable=True)
    clock_in_distance_m = Column(Numeric(12, 1), nullable=True)
    approval_status = Column(String, nullable=False, default=ApprovalStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint('employee_id', 'work_date', name='uq_work_record_employee_date'),
    )

    # Relationships
    employee = relationship("Employee", backref="work_records")

    @property
    def is_completed(self) -> bool:
        """Counts toward hours and pay: clocked out and not a leave day."""
        return self.clock_out_time is not None and not self.is_leave
