"""
Timesheet summary schemas
"""
from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

from app.services.payment_cycle import PaymentStatus


class TimesheetSummaryOut(BaseModel):
    """One employee's work month with its derived payment status."""
    employee_id: int
    employee_name: str
    year: int
    month: int
    month_name: str
    completed_days: int
    leave_days: int
    open_days: int
    total_hours: Decimal
    hourly_rate: Optional[Decimal] = None
    estimated_pay: Optional[Decimal] = None
    payment_status: PaymentStatus
    due_date: date
    due_date_display: str
    due_date_long: str
    as_of: date
