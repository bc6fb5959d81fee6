"""
Task board endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_roles
from app.models.employee import Employee, Role
from app.models.task import TaskStatus
from app.schemas.task import TaskCreate, TaskUpdate, TaskStatusUpdate, TaskOut, TaskListResponse
from app.services.task_service import create_task, list_tasks, update_task, move_task

router = APIRouter()


@router.post("", response_model=TaskOut, status_code=201)
async def create_task_endpoint(
    data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.MANAGER, Role.ADMIN))
):
    return create_task(db, data, current_user)


@router.get("", response_model=TaskListResponse)
async def list_tasks_endpoint(
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Board tasks; employees only see their own"""
    items = list_tasks(db, current_user, task_status=task_status)
    return TaskListResponse(items=items, total=len(items))


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task_endpoint(
    task_id: int,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Partial update. Assignees may only change the status."""
    return update_task(db, task_id, data, current_user)


@router.patch("/{task_id}/status", response_model=TaskOut)
async def move_task_endpoint(
    task_id: int,
    data: TaskStatusUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Move a task between board columns"""
    return move_task(db, task_id, data.status, current_user)
