"""
Employee model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, Numeric
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class Role(str, enum.Enum):
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    emp_code = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)  # Display name; legacy payroll rows are matched on it
    email = Column(String, nullable=True)
    role = Column(String, nullable=False, default=Role.EMPLOYEE.value)
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    gst_registered = Column(Boolean, default=False, nullable=False)  # 10% GST added to generated invoices
    abn_registered = Column(Boolean, default=False, nullable=False)
    password_hash = Column(String, nullable=True)
    join_date = Column(Date, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)
