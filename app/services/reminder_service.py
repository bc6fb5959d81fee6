"""
Payment reminders for admins

One reminder per employee work month, keyed payment-{employee_id}-{year}-{month}.
A month that becomes pending gets a medium-priority reminder; an overdue month
gets (or is escalated to) a high-priority one; a paid month closes its reminder.
"""
import logging
from datetime import date
from typing import List, Optional, Set, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.employee import Employee, Role
from app.models.reminder import Reminder, ReminderStatus
from app.models.task import TaskPriority
from app.models.work_record import WorkRecord
from app.services.audit_service import log_audit
from app.services.payment_cycle import PaymentStatus, payment_due_date, resolve_payment_status
from app.services.payroll_service import payroll_candidates
from app.utils.date_format import format_long_date, month_name
from app.utils.datetime_utils import today_local
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)


def reminder_key(employee_id: int, year: int, month: int) -> str:
    return f"payment-{employee_id}-{year}-{month}"


def work_months(records) -> List[Tuple[int, int]]:
    """Distinct (year, month) of completed work, oldest first."""
    months: Set[Tuple[int, int]] = set()
    for record in records:
        if record.is_completed:
            months.add((record.work_date.year, record.work_date.month))
    return sorted(months)


def _wording(employee: Employee, year: int, month: int, overdue: bool) -> Tuple[str, str]:
    due = format_long_date(payment_due_date(year, month))
    period = f"{month_name(month)} {year}"
    if overdue:
        return (
            f"Employee Payment Overdue - {employee.name}",
            f"Payment for work done in {period} is overdue. Due date was: {due}.",
        )
    return (
        f"Employee Payment Pending - {employee.name}",
        f"Payment for work done in {period} is pending. Due date: {due}.",
    )


def generate_payment_reminders(db: Session, actor_id: int, today: Optional[date] = None) -> dict:
    """
    Create, escalate or close payment reminders for every active non-admin employee.

    Runs on any day: statuses come from the payment cycle and reminders are
    keyed per work month, so repeated runs create no duplicates. A reminder an
    admin completed stays completed.
    """
    if today is None:
        today = today_local()

    summary = {"employees_processed": 0, "created": 0, "escalated": 0, "completed": 0, "as_of": today}
    existing = {r.related_id: r for r in db.query(Reminder).filter(Reminder.type == "payment").all()}

    employees = (
        db.query(Employee)
        .filter(Employee.active.is_(True), Employee.role != Role.ADMIN.value)
        .order_by(Employee.id)
        .all()
    )
    for employee in employees:
        summary["employees_processed"] += 1
        records = db.query(WorkRecord).filter(WorkRecord.employee_id == employee.id).all()
        payrolls = payroll_candidates(db, employee.id, employee.name)

        for year, month in work_months(records):
            payment_status = resolve_payment_status(
                employee.name, year, month, payrolls, today=today, employee_id=employee.id
            )
            key = reminder_key(employee.id, year, month)
            reminder = existing.get(key)

            if payment_status == PaymentStatus.PAID:
                if reminder is not None and reminder.status == ReminderStatus.PENDING.value:
                    reminder.status = ReminderStatus.COMPLETED.value
                    summary["completed"] += 1
                continue
            if payment_status == PaymentStatus.WORK_IN_PROGRESS:
                continue

            overdue = payment_status == PaymentStatus.OVERDUE
            priority = TaskPriority.HIGH.value if overdue else TaskPriority.MEDIUM.value
            title, description = _wording(employee, year, month, overdue)

            if reminder is None:
                reminder = Reminder(
                    type="payment",
                    title=title,
                    description=description,
                    due_date=payment_due_date(year, month),
                    priority=priority,
                    status=ReminderStatus.PENDING.value,
                    related_id=key,
                    employee_id=employee.id,
                )
                db.add(reminder)
                existing[key] = reminder
                summary["created"] += 1
            elif (
                overdue
                and reminder.status == ReminderStatus.PENDING.value
                and reminder.priority != TaskPriority.HIGH.value
            ):
                reminder.title = title
                reminder.description = description
                reminder.priority = priority
                summary["escalated"] += 1

    log_audit(
        db=db,
        actor_id=actor_id,
        action="REMINDERS_GENERATE",
        entity_type="reminders",
        meta=dict(summary),
        commit=False,
    )
    db.commit()
    logger.info(
        "Payment reminders: %d created, %d escalated, %d completed",
        summary["created"], summary["escalated"], summary["completed"],
    )
    return summary


def list_reminders(db: Session, reminder_status: Optional[ReminderStatus] = None) -> List[Reminder]:
    query = db.query(Reminder)
    if reminder_status is not None:
        query = query.filter(Reminder.status == enum_to_str(reminder_status))
    return query.order_by(Reminder.due_date, Reminder.id).all()


def complete_reminder(db: Session, reminder_id: int, actor_id: int) -> Reminder:
    """
    Mark a reminder done.

    Raises:
        HTTPException: 404 not found, 409 already completed
    """
    reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
    if not reminder:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Reminder with id {reminder_id} not found"
        )
    if reminder.status == ReminderStatus.COMPLETED.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Reminder is already completed"
        )

    reminder.status = ReminderStatus.COMPLETED.value
    log_audit(
        db=db,
        actor_id=actor_id,
        action="REMINDER_COMPLETE",
        entity_type="reminders",
        entity_id=reminder.id,
        commit=False,
    )
    db.commit()
    db.refresh(reminder)
    return reminder
