"""
Invoice service - client invoices with status derived on read
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.invoice import Invoice, InvoiceStatus
from app.schemas.invoice import InvoiceCreate, InvoiceOut
from app.services.audit_service import log_audit
from app.services.payment_cycle import payment_due_date, resolve_invoice_status
from app.services.site_service import get_site_or_404
from app.utils.datetime_utils import today_local
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)


def get_invoice_or_404(db: Session, invoice_id: int) -> Invoice:
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Invoice with id {invoice_id} not found"
        )
    return invoice


def derived_status(invoice: Invoice, as_of: Optional[date] = None) -> str:
    """Received stays received; anything else is pending/overdue from the issue date."""
    if enum_to_str(invoice.status) == InvoiceStatus.RECEIVED.value:
        return InvoiceStatus.RECEIVED.value
    return resolve_invoice_status(invoice.issue_date, today=as_of)


def to_invoice_out(invoice: Invoice, as_of: date) -> InvoiceOut:
    out = InvoiceOut.model_validate(invoice)
    return out.model_copy(update={"status": derived_status(invoice, as_of)})


def create_invoice(db: Session, data: InvoiceCreate, actor_id: int) -> Invoice:
    """
    Issue an invoice. due_date defaults to the 15th of the month after issue;
    total_amount is amount + gst.

    Raises:
        HTTPException: 409 duplicate invoice_number, 404 unknown site
    """
    existing = db.query(Invoice).filter(Invoice.invoice_number == data.invoice_number).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invoice '{data.invoice_number}' already exists"
        )
    if data.site_id is not None:
        get_site_or_404(db, data.site_id)

    due = data.due_date or payment_due_date(data.issue_date.year, data.issue_date.month)
    if due < data.issue_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="due_date must not be before issue_date"
        )

    invoice = Invoice(
        invoice_number=data.invoice_number,
        client_name=data.client_name,
        site_id=data.site_id,
        amount=data.amount,
        gst=data.gst,
        total_amount=data.amount + data.gst,
        issue_date=data.issue_date,
        due_date=due,
        status=InvoiceStatus.PENDING.value,
        notes=data.notes,
    )
    db.add(invoice)
    db.commit()
    db.refresh(invoice)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="INVOICE_CREATE",
        entity_type="invoices",
        entity_id=invoice.id,
        meta={
            "invoice_number": invoice.invoice_number,
            "total_amount": invoice.total_amount,
            "due_date": invoice.due_date,
        }
    )
    return invoice


def list_invoices(db: Session) -> List[Invoice]:
    return db.query(Invoice).order_by(Invoice.issue_date.desc(), Invoice.id.desc()).all()


def mark_received(db: Session, invoice_id: int, actor_id: int, payment_date: Optional[date] = None) -> Invoice:
    """
    Record client payment of an invoice.

    Raises:
        HTTPException: 404 not found, 409 already received
    """
    invoice = get_invoice_or_404(db, invoice_id)
    if enum_to_str(invoice.status) == InvoiceStatus.RECEIVED.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Invoice is already marked as received"
        )

    invoice.status = InvoiceStatus.RECEIVED.value
    invoice.payment_date = payment_date or today_local()
    db.commit()
    db.refresh(invoice)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="INVOICE_RECEIVED",
        entity_type="invoices",
        entity_id=invoice.id,
        meta={"payment_date": invoice.payment_date},
    )
    logger.info("Invoice %s marked received", invoice.invoice_number)
    return invoice
