"""
Timesheet automation - turn a finished work month into an invoice and the
payroll record that pays it.
"""
import calendar
import logging
import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.invoice import Invoice, InvoiceStatus
from app.models.payroll import CashFlowMode, CashFlowType, PayrollRecord, PayrollStatus
from app.models.site import Site
from app.models.work_record import ApprovalStatus, WorkRecord
from app.services.audit_service import log_audit
from app.services.payment_cycle import payment_due_date, payment_month_start
from app.utils.date_format import format_display_date, month_name

logger = logging.getLogger(__name__)

GST_RATE = Decimal("0.10")
CENT = Decimal("0.01")


def timesheet_invoice_number(employee_name: str, year: int, month: int) -> str:
    """EMP-{NAME}-{YYYY}-{MM}, e.g. EMP-ANA-CLEANER-2025-10."""
    name_part = re.sub(r"\s+", "-", employee_name.strip()).upper()
    return f"EMP-{name_part}-{year}-{month:02d}"


def _month_bounds(year: int, month: int):
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def _pending_completed_records(db: Session, employee_id: Optional[int], year: int, month: int):
    first, last = _month_bounds(year, month)
    query = db.query(WorkRecord).filter(
        WorkRecord.work_date >= first,
        WorkRecord.work_date <= last,
        WorkRecord.is_leave.is_(False),
        WorkRecord.clock_out_time.isnot(None),
        WorkRecord.approval_status == ApprovalStatus.PENDING.value,
    )
    if employee_id is not None:
        query = query.filter(WorkRecord.employee_id == employee_id)
    return query.order_by(WorkRecord.work_date).all()


def process_employee_timesheet(
    db: Session,
    employee: Employee,
    year: int,
    month: int,
    actor_id: int,
) -> dict:
    """
    Create the invoice and payroll record for one employee's work month.

    Only clocked-out, non-leave records still pending approval are billed.
    Running it again for the same month reports the existing invoice instead
    of creating another. GST of 10% is added for GST-registered employees.
    """
    result = {
        "employee_id": employee.id,
        "employee_name": employee.name,
        "invoice_created": False,
        "invoice_id": None,
        "payroll_created": False,
        "payroll_id": None,
        "error": None,
    }
    invoice_number = timesheet_invoice_number(employee.name, year, month)

    existing = db.query(Invoice).filter(Invoice.invoice_number == invoice_number).first()
    if existing:
        payroll = db.query(PayrollRecord).filter(PayrollRecord.invoice_number == invoice_number).first()
        result.update(invoice_id=existing.id, payroll_created=payroll is not None,
                      payroll_id=payroll.id if payroll else None)
        return result

    records = _pending_completed_records(db, employee.id, year, month)
    if not records:
        result["error"] = "No pending timesheet records found for this month"
        return result

    total_hours = sum((Decimal(str(r.hours_worked or 0)) for r in records), Decimal("0"))
    rate = Decimal(str(employee.hourly_rate or 0))
    earnings = (total_hours * rate).quantize(CENT, rounding=ROUND_HALF_UP)
    if earnings == 0:
        result["error"] = "No earnings calculated from timesheet records"
        return result

    gst = (earnings * GST_RATE).quantize(CENT, rounding=ROUND_HALF_UP) if employee.gst_registered else Decimal("0.00")
    site_id = next((r.site_id for r in records if r.site_id is not None), None)
    site = db.get(Site, site_id) if site_id is not None else None
    period = f"{year}-{month:02d}"

    invoice = Invoice(
        invoice_number=invoice_number,
        client_name=employee.name,
        site_id=site_id,
        amount=earnings,
        gst=gst,
        total_amount=earnings + gst,
        issue_date=date(year, month, 1),
        due_date=payment_due_date(year, month),
        status=InvoiceStatus.PENDING.value,
        notes=f"Auto-generated from timesheet for {period}. Total hours: {total_hours.quantize(CENT)}",
    )
    payroll = PayrollRecord(
        employee_id=employee.id,
        name=employee.name,
        month=month_name(month),
        work_year=year,
        date=format_display_date(payment_month_start(year, month)),
        mode_of_cash_flow=CashFlowMode.OUTFLOW.value,
        type_of_cash_flow=CashFlowType.INTERNAL_PAYROLL.value,
        site_of_work=site.name if site else None,
        abn_registered=employee.abn_registered,
        gst_registered=employee.gst_registered,
        invoice_number=invoice_number,
        amount_excl_gst=earnings,
        gst_amount=gst,
        total_amount=earnings + gst,
        status=PayrollStatus.PENDING.value,
        notes=f"Auto-generated from invoice {invoice_number}",
    )

    try:
        db.add_all([invoice, payroll])
        db.flush()
        log_audit(
            db=db,
            actor_id=actor_id,
            action="TIMESHEET_INVOICE_CREATE",
            entity_type="invoices",
            entity_id=invoice.id,
            meta={"employee_id": employee.id, "period": period, "hours": total_hours, "total_amount": earnings + gst},
            commit=False,
        )
        log_audit(
            db=db,
            actor_id=actor_id,
            action="PAYROLL_AUTO_CREATE",
            entity_type="payroll_records",
            entity_id=payroll.id,
            meta={"invoice_number": invoice_number, "status": payroll.status},
            commit=False,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Timesheet processing failed for %s (%s): %s", employee.name, period, e)
        result["error"] = "Failed to create invoice and payroll"
        return result

    logger.info("Invoice %s created from %d timesheet records", invoice_number, len(records))
    result.update(invoice_created=True, invoice_id=invoice.id, payroll_created=True, payroll_id=payroll.id)
    return result


def process_all_pending_timesheets(db: Session, year: int, month: int, actor_id: int) -> dict:
    """Run process_employee_timesheet for everyone with pending completed records in the month."""
    summary = {
        "year": year,
        "month": month,
        "processed": 0,
        "invoices_created": 0,
        "payrolls_created": 0,
        "errors": [],
    }

    employee_ids = []
    for record in _pending_completed_records(db, None, year, month):
        if record.employee_id not in employee_ids:
            employee_ids.append(record.employee_id)

    for employee_id in employee_ids:
        employee = db.get(Employee, employee_id)
        summary["processed"] += 1
        result = process_employee_timesheet(db, employee, year, month, actor_id)
        summary["invoices_created"] += int(result["invoice_created"])
        summary["payrolls_created"] += int(result["invoice_created"] and result["payroll_created"])
        if result["error"]:
            summary["errors"].append(f"{employee.name}: {result['error']}")

    logger.info(
        "Processed %d employees for %04d-%02d: %d invoices, %d payroll records",
        summary["processed"], year, month, summary["invoices_created"], summary["payrolls_created"],
    )
    return summary
