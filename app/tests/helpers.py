"""
Shared test helpers
"""
from datetime import date, datetime, timezone

from app.core.security import hash_password
from app.models import Employee, Role, WorkRecord

PASSWORD = "testpass123"


def make_employee(db, emp_code, name, role=Role.EMPLOYEE, hourly_rate=None, active=True):
    employee = Employee(
        emp_code=emp_code,
        name=name,
        role=role.value,
        hourly_rate=hourly_rate,
        password_hash=hash_password(PASSWORD),
        join_date=date(2025, 1, 6),
        active=active,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def get_auth_token(client, emp_code, password=PASSWORD):
    """Helper to get auth token"""
    response = client.post(
        "/api/v1/auth/login",
        json={"emp_code": emp_code, "password": password}
    )
    return response.json()["access_token"]


def auth_headers(client, emp_code, password=PASSWORD):
    return {"Authorization": f"Bearer {get_auth_token(client, emp_code, password)}"}


def worked(employee_id, day, hours, closed=True, site_id=None):
    """Work record for one day, clocked out unless closed=False."""
    start = datetime(day.year, day.month, day.day, 21, 0, tzinfo=timezone.utc)
    return WorkRecord(
        employee_id=employee_id,
        work_date=day,
        clock_in_time=start,
        clock_out_time=start.replace(hour=23) if closed else None,
        hours_worked=hours if closed else 0,
        site_id=site_id,
    )
