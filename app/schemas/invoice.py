"""
Invoice schemas
"""
from datetime import date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class InvoiceCreate(BaseModel):
    invoice_number: str = Field(..., min_length=1, max_length=64)
    client_name: str = Field(..., min_length=1)
    site_id: Optional[int] = None
    amount: Decimal = Field(..., ge=0)
    gst: Decimal = Field(default=Decimal("0"), ge=0)
    issue_date: date
    due_date: Optional[date] = Field(None, description="Defaults to the payment due date of the issue month")
    notes: Optional[str] = None


class MarkReceivedRequest(BaseModel):
    payment_date: Optional[date] = None


class InvoiceOut(BaseModel):
    """Invoice with its status derived for the as-of day."""
    id: int
    invoice_number: str
    client_name: str
    site_id: Optional[int] = None
    amount: Decimal
    gst: Decimal
    total_amount: Decimal
    issue_date: date
    due_date: date
    status: str
    payment_date: Optional[date] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class InvoiceListResponse(BaseModel):
    items: List[InvoiceOut]
    total: int
    as_of: date
