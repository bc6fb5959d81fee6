"""
Payroll / cash-flow record model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class PayrollStatus(str, enum.Enum):
    PENDING = "pending"
    OVERDUE = "overdue"
    PAID = "paid"
    RECEIVED = "received"


class CashFlowMode(str, enum.Enum):
    INFLOW = "inflow"
    OUTFLOW = "outflow"


class CashFlowType(str, enum.Enum):
    CLEANER_PAYROLL = "cleaner_payroll"
    INTERNAL_PAYROLL = "internal_payroll"
    OTHER = "other"


class PayrollRecord(Base):
    __tablename__ = "payroll_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)  # Null on legacy rows
    name = Column(String, nullable=False, index=True)  # Worker display name
    month = Column(String, nullable=False)  # Long month name of the work month, e.g. "October"
    work_year = Column(Integer, nullable=True)
    date = Column(String, nullable=True)  # DD.MM.YYYY as entered
    mode_of_cash_flow = Column(String, nullable=False, default=CashFlowMode.OUTFLOW.value)
    type_of_cash_flow = Column(String, nullable=False, default=CashFlowType.CLEANER_PAYROLL.value)
    site_of_work = Column(String, nullable=True)
    abn_registered = Column(Boolean, nullable=False, default=False)
    gst_registered = Column(Boolean, nullable=False, default=False)
    invoice_number = Column(String, nullable=True)
    amount_excl_gst = Column(Numeric(12, 2), nullable=False, default=0)
    gst_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String, nullable=False, default="AUD")
    payment_method = Column(String, nullable=False, default="bank_transfer")
    payment_date = Column(String, nullable=True)  # DD.MM.YYYY; day the payment was made
    status = Column(String, nullable=False, default=PayrollStatus.PENDING.value, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)
