"""
Payment reminder schemas
"""
from datetime import date
from typing import Optional, List
from pydantic import BaseModel, ConfigDict


class ReminderOut(BaseModel):
    id: int
    type: str
    title: str
    description: Optional[str] = None
    due_date: date
    priority: str
    status: str
    related_id: str
    employee_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ReminderListResponse(BaseModel):
    items: List[ReminderOut]
    total: int


class ReminderGenerateResponse(BaseModel):
    employees_processed: int
    created: int
    escalated: int
    completed: int
    as_of: date
