"""
Database models
"""
from app.models.employee import Employee, Role
from app.models.site import Site, SiteStatus
from app.models.employee_location import EmployeeLocation, LocationStatus
from app.models.work_record import WorkRecord, ApprovalStatus
from app.models.payroll import PayrollRecord, PayrollStatus, CashFlowMode, CashFlowType
from app.models.invoice import Invoice, InvoiceStatus
from app.models.task import Task, TaskStatus, TaskPriority
from app.models.reminder import Reminder, ReminderStatus
from app.models.audit_log import AuditLog

__all__ = [
    "Employee",
    "Role",
    "Site",
    "SiteStatus",
    "EmployeeLocation",
    "LocationStatus",
    "WorkRecord",
    "ApprovalStatus",
    "PayrollRecord",
    "PayrollStatus",
    "CashFlowMode",
    "CashFlowType",
    "Invoice",
    "InvoiceStatus",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Reminder",
    "ReminderStatus",
    "AuditLog",
]
