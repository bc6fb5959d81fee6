"""
Payment automation schemas (invoice and timesheet processing)
"""
from datetime import date
from typing import Optional, List
from pydantic import BaseModel


class InvoiceProcessResult(BaseModel):
    invoice_id: int
    invoice_number: str
    status: str
    status_updated: bool
    payroll_created: bool
    payroll_id: Optional[int] = None


class InvoiceProcessSummary(BaseModel):
    invoices_processed: int
    statuses_updated: int
    payrolls_created: int
    errors: List[str]
    as_of: date


class TimesheetProcessResult(BaseModel):
    employee_id: int
    employee_name: str
    invoice_created: bool
    invoice_id: Optional[int] = None
    payroll_created: bool
    payroll_id: Optional[int] = None
    error: Optional[str] = None


class TimesheetProcessSummary(BaseModel):
    year: int
    month: int
    processed: int
    invoices_created: int
    payrolls_created: int
    errors: List[str]
