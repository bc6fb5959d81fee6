"""
Invoice automation - keep stored invoice statuses current and make sure every
pending/overdue invoice has a payroll record behind it.
"""
import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.invoice import Invoice, InvoiceStatus
from app.models.payroll import CashFlowMode, CashFlowType, PayrollRecord
from app.models.site import Site
from app.services.audit_service import log_audit
from app.services.invoice_service import get_invoice_or_404
from app.services.payment_cycle import payment_month_start, resolve_invoice_status
from app.utils.date_format import format_display_date, month_name, parse_display_date
from app.utils.datetime_utils import today_local
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)

PAYROLL_TRIGGER_STATUSES = (InvoiceStatus.PENDING.value, InvoiceStatus.OVERDUE.value)


def _site_name(db: Session, site_id: Optional[int]) -> Optional[str]:
    if site_id is None:
        return None
    site = db.get(Site, site_id)
    return site.name if site else None


def find_existing_payroll_for_invoice(
    invoice: Invoice,
    payrolls: Iterable[PayrollRecord],
    site_of_work: Optional[str] = None,
) -> Optional[PayrollRecord]:
    """
    Payroll record already covering this invoice.

    Matches on invoice number first. Records entered by hand without one match
    when name and site agree and the record date is within a day of the issue date.
    """
    for record in payrolls:
        if record.invoice_number and record.invoice_number == invoice.invoice_number:
            return record
        if record.name != invoice.client_name or record.site_of_work != site_of_work:
            continue
        recorded = parse_display_date(record.date)
        if recorded is not None and abs(recorded - invoice.issue_date) < timedelta(days=1):
            return record
    return None


def create_payroll_from_invoice(
    db: Session,
    invoice: Invoice,
    payroll_status: str,
    actor_id: int,
    site_of_work: Optional[str] = None,
) -> PayrollRecord:
    """Internal payroll record dated the 1st of the month after issue."""
    pay_day = payment_month_start(invoice.issue_date.year, invoice.issue_date.month)

    record = PayrollRecord(
        name=invoice.client_name,
        month=month_name(pay_day.month),
        work_year=pay_day.year,
        date=format_display_date(pay_day),
        mode_of_cash_flow=CashFlowMode.OUTFLOW.value,
        type_of_cash_flow=CashFlowType.INTERNAL_PAYROLL.value,
        site_of_work=site_of_work,
        gst_registered=invoice.gst > 0,
        invoice_number=invoice.invoice_number,
        amount_excl_gst=invoice.amount,
        gst_amount=invoice.gst,
        total_amount=invoice.total_amount,
        status=payroll_status,
        notes=f"Auto-generated from invoice {invoice.invoice_number}",
    )
    db.add(record)
    db.flush()
    log_audit(
        db=db,
        actor_id=actor_id,
        action="PAYROLL_AUTO_CREATE",
        entity_type="payroll_records",
        entity_id=record.id,
        meta={"invoice_number": invoice.invoice_number, "status": payroll_status},
        commit=False,
    )
    return record


def process_invoice_status_update(
    db: Session,
    invoice: Invoice,
    payrolls: List[PayrollRecord],
    actor_id: int,
    today: Optional[date] = None,
) -> dict:
    """
    Bring one invoice up to date.

    The stored status follows the issue date unless the invoice was received.
    A pending or overdue invoice without a payroll record gets one; the new
    record is appended to payrolls so a batch never creates it twice.
    """
    result = {
        "invoice_id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "status": enum_to_str(invoice.status),
        "status_updated": False,
        "payroll_created": False,
        "payroll_id": None,
    }
    if enum_to_str(invoice.status) == InvoiceStatus.RECEIVED.value:
        return result

    new_status = resolve_invoice_status(invoice.issue_date, today=today)
    if enum_to_str(invoice.status) != new_status:
        log_audit(
            db=db,
            actor_id=actor_id,
            action="INVOICE_STATUS_UPDATE",
            entity_type="invoices",
            entity_id=invoice.id,
            meta={"from": invoice.status, "to": new_status},
            commit=False,
        )
        invoice.status = new_status
        result["status_updated"] = True
    result["status"] = new_status

    payroll = None
    if new_status in PAYROLL_TRIGGER_STATUSES:
        site_of_work = _site_name(db, invoice.site_id)
        if find_existing_payroll_for_invoice(invoice, payrolls, site_of_work) is None:
            payroll = create_payroll_from_invoice(db, invoice, new_status, actor_id, site_of_work)

    db.commit()
    if payroll is not None:
        db.refresh(payroll)
        payrolls.append(payroll)
        result["payroll_created"] = True
        result["payroll_id"] = payroll.id
        logger.info("Payroll %s created from invoice %s", payroll.id, invoice.invoice_number)
    return result


def process_single_invoice(db: Session, invoice_id: int, actor_id: int, today: Optional[date] = None) -> dict:
    invoice = get_invoice_or_404(db, invoice_id)
    payrolls = db.query(PayrollRecord).all()
    return process_invoice_status_update(db, invoice, payrolls, actor_id, today=today)


def process_all_invoices(db: Session, actor_id: int, today: Optional[date] = None) -> dict:
    """
    Run the invoice automation over every invoice.

    A database error on one invoice is rolled back and reported; the rest are
    still processed.
    """
    if today is None:
        today = today_local()

    summary = {
        "invoices_processed": 0,
        "statuses_updated": 0,
        "payrolls_created": 0,
        "errors": [],
        "as_of": today,
    }
    payrolls = db.query(PayrollRecord).all()
    invoices = db.query(Invoice).order_by(Invoice.issue_date, Invoice.id).all()

    for invoice in invoices:
        summary["invoices_processed"] += 1
        number = invoice.invoice_number
        try:
            result = process_invoice_status_update(db, invoice, payrolls, actor_id, today=today)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error processing invoice %s: %s", number, e)
            summary["errors"].append(f"Error processing invoice {number}: {e}")
            continue
        summary["statuses_updated"] += int(result["status_updated"])
        summary["payrolls_created"] += int(result["payroll_created"])

    logger.info(
        "Processed %d invoices: %d statuses updated, %d payroll records created",
        summary["invoices_processed"], summary["statuses_updated"], summary["payrolls_created"],
    )
    return summary
