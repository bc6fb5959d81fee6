"""
Invoice endpoints (ADMIN-only)
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_roles
from app.models.employee import Employee, Role
from app.schemas.automation import InvoiceProcessResult, InvoiceProcessSummary
from app.schemas.invoice import InvoiceCreate, InvoiceOut, InvoiceListResponse, MarkReceivedRequest
from app.services.invoice_automation_service import process_all_invoices, process_single_invoice
from app.services.invoice_service import create_invoice, list_invoices, mark_received, to_invoice_out
from app.utils.datetime_utils import today_local

router = APIRouter()


@router.post("", response_model=InvoiceOut, status_code=201)
async def create_invoice_endpoint(
    data: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    invoice = create_invoice(db, data, current_user.id)
    return to_invoice_out(invoice, today_local())


@router.get("", response_model=InvoiceListResponse)
async def list_invoices_endpoint(
    as_of: Optional[date] = Query(None, description="Day statuses are derived for; defaults to today"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Invoices with pending/overdue derived from the issue date"""
    as_of = as_of or today_local()
    items = [to_invoice_out(invoice, as_of) for invoice in list_invoices(db)]
    return InvoiceListResponse(items=items, total=len(items), as_of=as_of)


@router.post("/process", response_model=InvoiceProcessSummary)
async def process_invoices_endpoint(
    as_of: Optional[date] = Query(None, description="Day statuses are derived for; defaults to today"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Refresh stored invoice statuses and create missing payroll records"""
    return process_all_invoices(db, current_user.id, today=as_of)


@router.post("/{invoice_id}/process", response_model=InvoiceProcessResult)
async def process_invoice_endpoint(
    invoice_id: int,
    as_of: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    return process_single_invoice(db, invoice_id, current_user.id, today=as_of)


@router.post("/{invoice_id}/mark-received", response_model=InvoiceOut)
async def mark_received_endpoint(
    invoice_id: int,
    data: Optional[MarkReceivedRequest] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    invoice = mark_received(db, invoice_id, current_user.id, payment_date=data.payment_date if data else None)
    return to_invoice_out(invoice, today_local())
