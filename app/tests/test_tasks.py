"""
Tests for the task board
"""
from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

from app.models import AuditLog, Task
from app.tests.helpers import auth_headers


def create_task(client, emp_code="MGR001", **payload):
    payload.setdefault("title", "Restock level 3 supplies")
    return client.post("/api/v1/tasks", json=payload, headers=auth_headers(client, emp_code))


def test_manager_creates_task(client, manager, employee):
    response = create_task(client, assignee_id=employee.id, priority="high", due_date="2025-10-10")
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "new"
    assert data["priority"] == "high"
    assert data["assignee_id"] == employee.id
    assert data["created_by"] == manager.id


def test_employee_cannot_create_task(client, employee):
    assert create_task(client, emp_code="EMP001").status_code == status.HTTP_403_FORBIDDEN


def test_unknown_assignee(client, manager):
    assert create_task(client, assignee_id=999).status_code == status.HTTP_404_NOT_FOUND


def test_employees_see_only_their_tasks(client, manager, employee, other_employee):
    mine = create_task(client, title="Mine", assignee_id=employee.id).json()
    create_task(client, title="Theirs", assignee_id=other_employee.id)

    listed = client.get("/api/v1/tasks", headers=auth_headers(client, "EMP001")).json()
    assert [t["id"] for t in listed["items"]] == [mine["id"]]

    everything = client.get("/api/v1/tasks", headers=auth_headers(client, "MGR001")).json()
    assert everything["total"] == 2


def test_assignee_may_only_change_status(client, db, manager, employee):
    task_id = create_task(client, assignee_id=employee.id).json()["id"]
    headers = auth_headers(client, "EMP001")

    renamed = client.patch(f"/api/v1/tasks/{task_id}", json={"title": "Easier task"}, headers=headers)
    assert renamed.status_code == status.HTTP_403_FORBIDDEN

    moved = client.patch(f"/api/v1/tasks/{task_id}", json={"status": "in_progress"}, headers=headers)
    assert moved.status_code == status.HTTP_200_OK
    assert moved.json()["status"] == "in_progress"
    assert db.query(AuditLog).filter(AuditLog.action == "TASK_MOVE").count() == 1


def test_non_assignee_cannot_update(client, manager, employee, other_employee):
    task_id = create_task(client, assignee_id=employee.id).json()["id"]
    headers = auth_headers(client, "EMP002")
    assert client.patch(f"/api/v1/tasks/{task_id}", json={"status": "completed"}, headers=headers).status_code == 403
    assert client.patch(f"/api/v1/tasks/{task_id}/status", json={"status": "completed"}, headers=headers).status_code == 403


def test_manager_updates_any_field(client, db, manager, employee, other_employee):
    task_id = create_task(client, assignee_id=employee.id).json()["id"]
    response = client.patch(
        f"/api/v1/tasks/{task_id}",
        json={"title": "Deep clean lobby", "priority": "low", "assignee_id": other_employee.id},
        headers=auth_headers(client, "MGR001"),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Deep clean lobby"
    assert data["priority"] == "low"
    assert data["assignee_id"] == other_employee.id
    assert db.query(AuditLog).filter(AuditLog.action == "TASK_UPDATE").count() == 1


def test_drag_and_drop_move(client, manager, employee):
    task_id = create_task(client, assignee_id=employee.id).json()["id"]
    response = client.patch(
        f"/api/v1/tasks/{task_id}/status",
        json={"status": "completed"},
        headers=auth_headers(client, "EMP001"),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "completed"

    invalid = client.patch(
        f"/api/v1/tasks/{task_id}/status",
        json={"status": "archived"},
        headers=auth_headers(client, "EMP001"),
    )
    assert invalid.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_failed_commit_is_rolled_back(client, db, manager, employee, monkeypatch):
    task_id = create_task(client, assignee_id=employee.id).json()["id"]
    headers = auth_headers(client, "EMP001")

    def failing_commit():
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(db, "commit", failing_commit)
    response = client.patch(f"/api/v1/tasks/{task_id}/status", json={"status": "completed"}, headers=headers)
    monkeypatch.undo()

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Failed to update task"
    assert db.get(Task, task_id).status == "new"
    assert db.query(AuditLog).filter(AuditLog.action == "TASK_MOVE").count() == 0


def test_unknown_task(client, manager):
    response = client.patch("/api/v1/tasks/999/status", json={"status": "completed"}, headers=auth_headers(client, "MGR001"))
    assert response.status_code == status.HTTP_404_NOT_FOUND
