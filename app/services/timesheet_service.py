"""
Timesheet service - monthly hours, estimated pay and payment status
"""
import calendar
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.work_record import WorkRecord
from app.services.payment_cycle import payment_due_date, resolve_payment_status
from app.services.payroll_service import payroll_candidates
from app.utils.date_format import format_display_date, format_long_date, month_name
from app.utils.datetime_utils import today_local


def monthly_summary(
    db: Session,
    employee: Employee,
    year: int,
    month: int,
    as_of: Optional[date] = None,
) -> dict:
    """
    Summarise one employee's work month.

    Only completed records (clocked out, not leave) count toward hours and pay;
    a record still open is reported separately. The payment status is derived
    for the as_of day, which defaults to today in the business time zone.
    """
    if not 1 <= month <= 12:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="month must be between 1 and 12"
        )
    if as_of is None:
        as_of = today_local()

    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    records = db.query(WorkRecord).filter(
        WorkRecord.employee_id == employee.id,
        WorkRecord.work_date >= first,
        WorkRecord.work_date <= last,
    ).all()

    completed = [r for r in records if r.is_completed]
    leave_days = sum(1 for r in records if r.is_leave)
    open_days = sum(1 for r in records if not r.is_leave and r.clock_out_time is None)
    total_hours = sum((Decimal(str(r.hours_worked or 0)) for r in completed), Decimal("0"))

    hourly_rate = Decimal(str(employee.hourly_rate)) if employee.hourly_rate is not None else None
    estimated_pay = (hourly_rate * total_hours).quantize(Decimal("0.01")) if hourly_rate is not None else None

    payment_status = resolve_payment_status(
        employee.name,
        year,
        month,
        payroll_candidates(db, employee.id, employee.name),
        today=as_of,
        employee_id=employee.id,
    )
    due = payment_due_date(year, month)

    return {
        "employee_id": employee.id,
        "employee_name": employee.name,
        "year": year,
        "month": month,
        "month_name": month_name(month),
        "completed_days": len(completed),
        "leave_days": leave_days,
        "open_days": open_days,
        "total_hours": total_hours.quantize(Decimal("0.01")),
        "hourly_rate": hourly_rate,
        "estimated_pay": estimated_pay,
        "payment_status": payment_status,
        "due_date": due,
        "due_date_display": format_display_date(due),
        "due_date_long": format_long_date(due),
        "as_of": as_of,
    }
