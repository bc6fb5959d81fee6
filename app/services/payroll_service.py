"""
Payroll service - cash-flow records that settle employees' work months
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.payroll import PayrollRecord
from app.schemas.payroll import PayrollCreate, PayrollUpdate
from app.services.audit_service import log_audit
from app.services.employee_service import get_employee_or_404
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)


def get_payroll_or_404(db: Session, payroll_id: int) -> PayrollRecord:
    record = db.query(PayrollRecord).filter(PayrollRecord.id == payroll_id).first()
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Payroll record with id {payroll_id} not found"
        )
    return record


def create_payroll_record(db: Session, data: PayrollCreate, actor_id: int) -> PayrollRecord:
    """
    Create a payroll record.

    The display name defaults to the employee's name when employee_id is given;
    total_amount defaults to amount_excl_gst + gst_amount.

    Raises:
        HTTPException: 404 unknown employee, 400 no name and no employee
    """
    name = data.name.strip() if data.name else None
    if data.employee_id is not None:
        employee = get_employee_or_404(db, data.employee_id)
        name = name or employee.name
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either name or employee_id is required"
        )

    total = data.total_amount
    if total is None:
        total = data.amount_excl_gst + data.gst_amount

    record = PayrollRecord(
        employee_id=data.employee_id,
        name=name,
        month=data.month,
        work_year=data.work_year,
        date=data.date,
        mode_of_cash_flow=enum_to_str(data.mode_of_cash_flow),
        type_of_cash_flow=enum_to_str(data.type_of_cash_flow),
        site_of_work=data.site_of_work,
        abn_registered=data.abn_registered,
        gst_registered=data.gst_registered,
        invoice_number=data.invoice_number,
        amount_excl_gst=data.amount_excl_gst,
        gst_amount=data.gst_amount,
        total_amount=total,
        currency=data.currency,
        payment_method=data.payment_method,
        payment_date=data.payment_date,
        status=enum_to_str(data.status),
        notes=data.notes,
    )
    db.add(record)
    db.commit()
    db.refresh(record)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="PAYROLL_CREATE",
        entity_type="payroll_records",
        entity_id=record.id,
        meta={
            "name": record.name,
            "month": record.month,
            "work_year": record.work_year,
            "status": record.status,
            "total_amount": record.total_amount,
        }
    )
    return record


def update_payroll_record(db: Session, payroll_id: int, data: PayrollUpdate, actor_id: int) -> PayrollRecord:
    record = get_payroll_or_404(db, payroll_id)

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(record, field, enum_to_str(value) if field == "status" else value)

    db.commit()
    db.refresh(record)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="PAYROLL_UPDATE",
        entity_type="payroll_records",
        entity_id=record.id,
        meta=changes,
    )
    return record


def list_payroll_records(
    db: Session,
    employee_id: Optional[int] = None,
    month: Optional[str] = None,
    work_year: Optional[int] = None,
    record_status: Optional[str] = None,
) -> List[PayrollRecord]:
    query = db.query(PayrollRecord)
    if employee_id is not None:
        query = query.filter(PayrollRecord.employee_id == employee_id)
    if month:
        query = query.filter(PayrollRecord.month == month.strip().capitalize())
    if work_year is not None:
        query = query.filter(PayrollRecord.work_year == work_year)
    if record_status:
        query = query.filter(PayrollRecord.status == record_status)
    return query.order_by(PayrollRecord.id.desc()).all()


def payroll_candidates(db: Session, employee_id: int, name: str) -> List[PayrollRecord]:
    """Records that may pay for one of the employee's work months: keyed to the id, or legacy rows by name."""
    return (
        db.query(PayrollRecord)
        .filter((PayrollRecord.employee_id == employee_id) | (PayrollRecord.name == name))
        .all()
    )
