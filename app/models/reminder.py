"""
Payment reminder model
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class ReminderStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False, default="payment")
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(Date, nullable=False)
    priority = Column(String, nullable=False, default="medium")  # TaskPriority values
    status = Column(String, nullable=False, default=ReminderStatus.PENDING.value, index=True)
    related_id = Column(String, unique=True, nullable=False, index=True)  # payment-{employee_id}-{year}-{month}
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)
