"""
Employee work location model (geofence requested by an employee, approved by an admin)
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class LocationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EmployeeLocation(Base):
    __tablename__ = "employee_locations"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    site_id = Column(Integer, ForeignKey("sites.id"), nullable=False, index=True)
    address = Column(String, nullable=True)
    latitude = Column(Numeric(10, 8), nullable=True)  # Null only when allow_work_from_anywhere
    longitude = Column(Numeric(11, 8), nullable=True)
    radius_meters = Column(Integer, nullable=False, default=50)
    allow_work_from_anywhere = Column(Boolean, nullable=False, default=False)
    status = Column(String, nullable=False, default=LocationStatus.PENDING.value, index=True)
    approved_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    # Relationships
    employee = relationship("Employee", foreign_keys=[employee_id], backref="locations")
    site = relationship("Site")
    approver = relationship("Employee", foreign_keys=[approved_by])
