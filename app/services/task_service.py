"""
Task board service - Kanban tasks with role-gated updates
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.deps import is_supervisor
from app.models.employee import Employee
from app.models.task import Task, TaskStatus
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.audit_service import log_audit
from app.services.employee_service import get_employee_or_404
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)

ASSIGNEE_EDITABLE_FIELDS = frozenset({"status"})


def get_task_or_404(db: Session, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task with id {task_id} not found"
        )
    return task


def _commit_or_rollback(db: Session, task: Task) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Task %s update failed, rolled back: %s", task.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task"
        )
    db.refresh(task)


def create_task(db: Session, data: TaskCreate, creator: Employee) -> Task:
    if data.assignee_id is not None:
        get_employee_or_404(db, data.assignee_id)

    task = Task(
        title=data.title.strip(),
        description=data.description,
        status=TaskStatus.NEW.value,
        priority=enum_to_str(data.priority),
        assignee_id=data.assignee_id,
        created_by=creator.id,
        due_date=data.due_date,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    log_audit(
        db=db,
        actor_id=creator.id,
        action="TASK_CREATE",
        entity_type="tasks",
        entity_id=task.id,
        meta={"title": task.title, "assignee_id": task.assignee_id},
    )
    return task


def list_tasks(db: Session, viewer: Employee, task_status: Optional[TaskStatus] = None) -> List[Task]:
    """Supervisors see every task; employees see the tasks assigned to them."""
    query = db.query(Task)
    if not is_supervisor(viewer):
        query = query.filter(Task.assignee_id == viewer.id)
    if task_status is not None:
        query = query.filter(Task.status == enum_to_str(task_status))
    return query.order_by(Task.id).all()


def update_task(db: Session, task_id: int, data: TaskUpdate, actor: Employee) -> Task:
    """
    Apply a partial update.

    Admins and managers may change every field. The assignee may change only
    the status. The change and its audit entry commit together; a failed commit is rolled back.

    Raises:
        HTTPException: 404 not found, 403 not allowed, 500 commit failed
    """
    task = get_task_or_404(db, task_id)
    changes = data.model_dump(exclude_unset=True)

    if not is_supervisor(actor):
        if task.assignee_id != actor.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to update this task"
            )
        forbidden = set(changes) - ASSIGNEE_EDITABLE_FIELDS
        if forbidden:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Assignees may only change the task status, not {sorted(forbidden)}"
            )

    if changes.get("assignee_id") is not None:
        get_employee_or_404(db, changes["assignee_id"])

    previous_status = task.status
    for field, value in changes.items():
        setattr(task, field, enum_to_str(value) if field in ("status", "priority") else value)

    action = "TASK_MOVE" if set(changes) == {"status"} else "TASK_UPDATE"
    log_audit(
        db=db,
        actor_id=actor.id,
        action=action,
        entity_type="tasks",
        entity_id=task.id,
        meta={"changes": changes, "previous_status": previous_status},
        commit=False,
    )
    _commit_or_rollback(db, task)
    return task


def move_task(db: Session, task_id: int, new_status: TaskStatus, actor: Employee) -> Task:
    """Drag-and-drop move between board columns."""
    return update_task(db, task_id, TaskUpdate(status=new_status), actor)
