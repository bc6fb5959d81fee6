"""
Tests for login, token handling and role guards
"""
from fastapi import status

from app.models import AuditLog
from app.tests.helpers import PASSWORD, auth_headers, make_employee


def test_login_success(client, employee):
    response = client.post("/api/v1/auth/login", json={"emp_code": "EMP001", "password": PASSWORD})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["employee_id"] == employee.id
    assert data["role"] == "EMPLOYEE"


def test_login_writes_audit_entry(client, db, employee):
    client.post("/api/v1/auth/login", json={"emp_code": "EMP001", "password": PASSWORD})
    assert db.query(AuditLog).filter(AuditLog.action == "AUTH_LOGIN_SUCCESS").count() == 1


def test_login_wrong_password(client, employee):
    response = client.post("/api/v1/auth/login", json={"emp_code": "EMP001", "password": "wrong-pass"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid employee code or password"


def test_login_unknown_employee(client, db):
    response = client.post("/api/v1/auth/login", json={"emp_code": "NOPE", "password": PASSWORD})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_inactive_employee(client, db):
    make_employee(db, "EMP099", "Gone Cleaner", active=False)
    response = client.post("/api/v1/auth/login", json={"emp_code": "EMP099", "password": PASSWORD})
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_me_requires_token(client, employee):
    response = client.get("/api/v1/employees/me")
    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_me_rejects_invalid_token(client, employee):
    response = client.get("/api/v1/employees/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    body = response.json()
    assert body["error"] is True
    assert body["path"] == "/api/v1/employees/me"


def test_me_returns_profile(client, employee):
    response = client.get("/api/v1/employees/me", headers=auth_headers(client, "EMP001"))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["emp_code"] == "EMP001"
    assert data["name"] == "Ana Cleaner"
    assert "password_hash" not in data
