"""
Work record endpoints: clock in, clock out, leave days
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_roles
from app.models.employee import Employee, Role
from app.schemas.work_record import (
    ClockInRequest,
    ClockOutRequest,
    LeaveDayRequest,
    WorkRecordOut,
    WorkRecordListResponse,
)
from app.services.employee_service import get_employee_or_404
from app.services.work_record_service import clock_in, clock_out, record_leave, list_work_records

router = APIRouter()


@router.post("/clock-in", response_model=WorkRecordOut, status_code=201)
async def clock_in_endpoint(
    data: ClockInRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """
    Clock in for today.

    The coordinate must fall inside one of the employee's approved locations
    (or one allowing work from anywhere). A device that failed to get a
    position sends location_error instead and gets the matching message back.
    """
    return clock_in(
        db,
        current_user,
        lat=data.lat,
        lng=data.lng,
        site_id=data.site_id,
        location_error=data.location_error,
    )


@router.post("/clock-out", response_model=WorkRecordOut)
async def clock_out_endpoint(
    data: Optional[ClockOutRequest] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return clock_out(
        db,
        current_user,
        lat=data.lat if data else None,
        lng=data.lng if data else None,
    )


@router.post("/leave", response_model=WorkRecordOut, status_code=201)
async def record_leave_endpoint(
    data: LeaveDayRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return record_leave(db, current_user, data.work_date, data.leave_type)


@router.get("/my", response_model=WorkRecordListResponse)
async def my_records_endpoint(
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    items = list_work_records(db, current_user.id, from_date, to_date)
    return WorkRecordListResponse(items=items, total=len(items))


@router.get("/employee/{employee_id}", response_model=WorkRecordListResponse)
async def employee_records_endpoint(
    employee_id: int,
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.MANAGER, Role.ADMIN))
):
    """Another employee's records (MANAGER/ADMIN)"""
    get_employee_or_404(db, employee_id)
    items = list_work_records(db, employee_id, from_date, to_date)
    return WorkRecordListResponse(items=items, total=len(items))
