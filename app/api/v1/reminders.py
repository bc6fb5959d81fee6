"""
Payment reminder endpoints (ADMIN-only)
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_roles
from app.models.employee import Employee, Role
from app.models.reminder import ReminderStatus
from app.schemas.reminder import ReminderGenerateResponse, ReminderListResponse, ReminderOut
from app.services.reminder_service import complete_reminder, generate_payment_reminders, list_reminders

router = APIRouter()


@router.get("", response_model=ReminderListResponse)
async def list_reminders_endpoint(
    status: Optional[ReminderStatus] = Query(None),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    items = list_reminders(db, status)
    return ReminderListResponse(items=items, total=len(items))


@router.post("/generate", response_model=ReminderGenerateResponse)
async def generate_reminders_endpoint(
    as_of: Optional[date] = Query(None, description="Day payment statuses are derived for; defaults to today"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Create pending/overdue payment reminders and close the ones that were paid"""
    return generate_payment_reminders(db, current_user.id, today=as_of)


@router.post("/{reminder_id}/complete", response_model=ReminderOut)
async def complete_reminder_endpoint(
    reminder_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    return complete_reminder(db, reminder_id, current_user.id)
