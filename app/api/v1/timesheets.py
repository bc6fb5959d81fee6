"""
Timesheet summary endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_roles
from app.models.employee import Employee, Role
from app.schemas.automation import TimesheetProcessResult, TimesheetProcessSummary
from app.schemas.timesheet import TimesheetSummaryOut
from app.services.employee_service import get_employee_or_404
from app.services.timesheet_automation_service import process_all_pending_timesheets, process_employee_timesheet
from app.services.timesheet_service import monthly_summary
from app.utils.datetime_utils import today_local

router = APIRouter()


@router.get("/me/summary", response_model=TimesheetSummaryOut)
async def my_summary_endpoint(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    as_of: Optional[date] = Query(None, description="Day the payment status is derived for; defaults to today"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Hours, estimated pay and payment status of one of my work months"""
    return monthly_summary(db, current_user, year, month, as_of=as_of)


@router.get("/{employee_id}/summary", response_model=TimesheetSummaryOut)
async def employee_summary_endpoint(
    employee_id: int,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    as_of: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    employee = get_employee_or_404(db, employee_id)
    return monthly_summary(db, employee, year, month, as_of=as_of)


def _default_period(year: Optional[int], month: Optional[int]):
    today = today_local()
    return year or today.year, month or today.month


@router.post("/process", response_model=TimesheetProcessSummary)
async def process_timesheets_endpoint(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Invoice every employee's pending completed work for a month (defaults to the current month)"""
    year, month = _default_period(year, month)
    return process_all_pending_timesheets(db, year, month, current_user.id)


@router.post("/{employee_id}/process", response_model=TimesheetProcessResult)
async def process_employee_timesheet_endpoint(
    employee_id: int,
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    employee = get_employee_or_404(db, employee_id)
    year, month = _default_period(year, month)
    return process_employee_timesheet(db, employee, year, month, current_user.id)
