"""
Payroll schemas
"""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.payroll import CashFlowMode, CashFlowType, PayrollStatus
from app.utils.date_format import month_number, parse_display_date, format_display_date


def _check_month_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    number = month_number(v)
    if number is None:
        raise ValueError("month must be a full month name, e.g. 'October'")
    # Stored capitalised so exact-match lookups work
    return v.strip().capitalize()


def _normalize_display_date(v: Optional[str]) -> Optional[str]:
    """Store DD.MM.YYYY; anything unparseable is kept verbatim (it resolves as 'no date')."""
    if v is None or v == "":
        return None
    if parse_display_date(v) is None:
        return v
    return format_display_date(v)


class PayrollCreate(BaseModel):
    employee_id: Optional[int] = None
    name: Optional[str] = Field(None, description="Worker display name; defaults to the employee's name")
    month: str = Field(..., description="Long name of the work month, e.g. 'October'")
    work_year: Optional[int] = Field(None, ge=2000, le=2100)
    date: Optional[str] = Field(None, description="DD.MM.YYYY or YYYY-MM-DD")
    mode_of_cash_flow: CashFlowMode = CashFlowMode.OUTFLOW
    type_of_cash_flow: CashFlowType = CashFlowType.CLEANER_PAYROLL
    site_of_work: Optional[str] = None
    abn_registered: bool = False
    gst_registered: bool = False
    invoice_number: Optional[str] = None
    amount_excl_gst: Decimal = Field(default=Decimal("0"), ge=0)
    gst_amount: Decimal = Field(default=Decimal("0"), ge=0)
    total_amount: Optional[Decimal] = Field(None, ge=0, description="Defaults to amount_excl_gst + gst_amount")
    currency: str = "AUD"
    payment_method: str = "bank_transfer"
    payment_date: Optional[str] = None
    status: PayrollStatus = PayrollStatus.PENDING
    notes: Optional[str] = None

    @field_validator("month")
    @classmethod
    def check_month(cls, v: str) -> str:
        return _check_month_name(v)

    @field_validator("date", "payment_date")
    @classmethod
    def normalize_dates(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_display_date(v)


class PayrollUpdate(BaseModel):
    status: Optional[PayrollStatus] = None
    payment_date: Optional[str] = None
    payment_method: Optional[str] = None
    total_amount: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator("payment_date")
    @classmethod
    def normalize_dates(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_display_date(v)


class PayrollOut(BaseModel):
    id: int
    employee_id: Optional[int] = None
    name: str
    month: str
    work_year: Optional[int] = None
    date: Optional[str] = None
    mode_of_cash_flow: str
    type_of_cash_flow: str
    site_of_work: Optional[str] = None
    invoice_number: Optional[str] = None
    amount_excl_gst: Decimal
    gst_amount: Decimal
    total_amount: Decimal
    currency: str
    payment_method: str
    payment_date: Optional[str] = None
    status: str
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PayrollListResponse(BaseModel):
    items: List[PayrollOut]
    total: int
