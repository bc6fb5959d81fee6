"""
Client invoice model
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class InvoiceStatus(str, enum.Enum):
    PENDING = "pending"
    RECEIVED = "received"
    OVERDUE = "overdue"


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String, unique=True, nullable=False, index=True)
    client_name = Column(String, nullable=False)
    site_id = Column(Integer, ForeignKey("sites.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    gst = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    issue_date = Column(Date, nullable=False, index=True)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default=InvoiceStatus.PENDING.value)  # Only "received" is authoritative
    payment_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)
