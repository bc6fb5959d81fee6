"""
Payroll endpoints (ADMIN-only)
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_roles
from app.models.employee import Employee, Role
from app.models.payroll import PayrollStatus
from app.schemas.payroll import PayrollCreate, PayrollUpdate, PayrollOut, PayrollListResponse
from app.services.payroll_service import create_payroll_record, update_payroll_record, list_payroll_records

router = APIRouter()


@router.post("", response_model=PayrollOut, status_code=201)
async def create_payroll_endpoint(
    data: PayrollCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    return create_payroll_record(db, data, current_user.id)


@router.get("", response_model=PayrollListResponse)
async def list_payroll_endpoint(
    employee_id: Optional[int] = Query(None),
    month: Optional[str] = Query(None, description="Long month name, e.g. 'October'"),
    work_year: Optional[int] = Query(None),
    record_status: Optional[PayrollStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    items = list_payroll_records(
        db,
        employee_id=employee_id,
        month=month,
        work_year=work_year,
        record_status=record_status.value if record_status else None,
    )
    return PayrollListResponse(items=items, total=len(items))


@router.patch("/{payroll_id}", response_model=PayrollOut)
async def update_payroll_endpoint(
    payroll_id: int,
    data: PayrollUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Update status, payment date, method, total or notes"""
    return update_payroll_record(db, payroll_id, data, current_user.id)
