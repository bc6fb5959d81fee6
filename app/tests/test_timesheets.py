"""
Tests for the monthly timesheet summary and its payment status
"""
from datetime import date
from decimal import Decimal

import pytest
from fastapi import status

from app.models import PayrollRecord, WorkRecord
from app.tests.helpers import auth_headers, worked


@pytest.fixture
def october_records(db, employee):
    db.add_all([
        worked(employee.id, date(2025, 10, 6), 7.5),
        worked(employee.id, date(2025, 10, 7), 4.25),
        worked(employee.id, date(2025, 10, 9), 0, closed=False),
        WorkRecord(employee_id=employee.id, work_date=date(2025, 10, 8), is_leave=True, leave_type="sick", hours_worked=0),
        worked(employee.id, date(2025, 11, 3), 6),
    ])
    db.commit()


def summary(client, emp_code="EMP001", **params):
    return client.get("/api/v1/timesheets/me/summary", params=params, headers=auth_headers(client, emp_code))


def test_month_totals_and_estimated_pay(client, employee, october_records):
    response = summary(client, year=2025, month=10, as_of="2025-11-05")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["month_name"] == "October"
    assert data["completed_days"] == 2
    assert data["leave_days"] == 1
    assert data["open_days"] == 1
    assert Decimal(str(data["total_hours"])) == Decimal("11.75")
    assert Decimal(str(data["hourly_rate"])) == Decimal("32.50")
    assert Decimal(str(data["estimated_pay"])) == Decimal("381.88")


def test_due_date_formats(client, employee):
    data = summary(client, year=2025, month=12, as_of="2025-12-20").json()
    assert data["due_date"] == "2026-01-15"
    assert data["due_date_display"] == "15.01.2026"
    assert data["due_date_long"] == "January 15, 2026"
    assert data["payment_status"] == "work_in_progress"
    assert data["as_of"] == "2025-12-20"


def test_payment_status_follows_the_calendar(client, employee, october_records):
    assert summary(client, year=2025, month=10, as_of="2025-10-20").json()["payment_status"] == "work_in_progress"
    assert summary(client, year=2025, month=10, as_of="2025-11-05").json()["payment_status"] == "pending"
    assert summary(client, year=2025, month=10, as_of="2025-11-15").json()["payment_status"] == "pending"
    assert summary(client, year=2025, month=10, as_of="2025-11-16").json()["payment_status"] == "overdue"


def test_keyed_paid_payroll_marks_month_paid(client, db, employee, october_records):
    db.add(PayrollRecord(
        employee_id=employee.id, name="Ana Cleaner", month="October", work_year=2025,
        type_of_cash_flow="cleaner_payroll", status="paid", total_amount=381.88,
    ))
    db.commit()
    assert summary(client, year=2025, month=10, as_of="2025-11-20").json()["payment_status"] == "paid"
    assert summary(client, year=2025, month=9, as_of="2025-11-20").json()["payment_status"] == "overdue"


def test_legacy_name_matched_payroll(client, db, employee):
    db.add(PayrollRecord(name="Ana Cleaner", month="October", type_of_cash_flow="cleaner_payroll", status="received"))
    db.commit()
    assert summary(client, year=2025, month=10, as_of="2026-01-01").json()["payment_status"] == "paid"


def test_namesake_keyed_to_another_employee_does_not_count(client, db, employee, other_employee):
    db.add(PayrollRecord(
        employee_id=other_employee.id, name="Ana Cleaner", month="October", work_year=2025,
        type_of_cash_flow="cleaner_payroll", status="paid",
    ))
    db.commit()
    assert summary(client, year=2025, month=10, as_of="2025-11-20").json()["payment_status"] == "overdue"


def test_no_hourly_rate_means_no_estimate(client, manager):
    data = summary(client, emp_code="MGR001", year=2025, month=10, as_of="2025-11-05").json()
    assert data["hourly_rate"] is None
    assert data["estimated_pay"] is None


def test_admin_reads_employee_summary(client, admin, employee, october_records):
    headers = auth_headers(client, "ADM001")
    response = client.get(
        f"/api/v1/timesheets/{employee.id}/summary",
        params={"year": 2025, "month": 10, "as_of": "2025-11-05"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["employee_name"] == "Ana Cleaner"

    missing = client.get("/api/v1/timesheets/999/summary", params={"year": 2025, "month": 10}, headers=headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_employee_cannot_read_others_summary(client, employee, other_employee):
    response = client.get(
        f"/api/v1/timesheets/{other_employee.id}/summary",
        params={"year": 2025, "month": 10},
        headers=auth_headers(client, "EMP001"),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_invalid_month_rejected(client, employee):
    assert summary(client, year=2025, month=13).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
