"""
Tests for payroll record administration
"""
from decimal import Decimal

from fastapi import status

from app.models import AuditLog
from app.tests.helpers import auth_headers


def create_payroll(client, **payload):
    return client.post("/api/v1/payroll", json=payload, headers=auth_headers(client, "ADM001"))


def test_create_payroll_defaults(client, db, admin, employee):
    response = create_payroll(
        client,
        employee_id=employee.id,
        month="october",
        work_year=2025,
        amount_excl_gst="300.00",
        gst_amount="30.00",
        payment_date="2025-11-14",
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Ana Cleaner"
    assert data["month"] == "October"
    assert Decimal(str(data["total_amount"])) == Decimal("330")
    assert data["payment_date"] == "14.11.2025"
    assert data["status"] == "pending"
    assert data["type_of_cash_flow"] == "cleaner_payroll"
    assert data["currency"] == "AUD"
    assert db.query(AuditLog).filter(AuditLog.action == "PAYROLL_CREATE").count() == 1


def test_create_legacy_payroll_by_name(client, admin):
    response = create_payroll(client, name="Casual Worker", month="September", total_amount="120", date="30.09.2025")
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["employee_id"] is None
    assert data["work_year"] is None
    assert data["date"] == "30.09.2025"
    assert Decimal(str(data["total_amount"])) == Decimal("120")


def test_unparseable_payment_date_kept_verbatim(client, admin, employee):
    response = create_payroll(client, employee_id=employee.id, month="October", payment_date="ASAP")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["payment_date"] == "ASAP"


def test_invalid_month_rejected(client, admin, employee):
    response = create_payroll(client, employee_id=employee.id, month="Octember")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_name_or_employee_required(client, admin):
    response = create_payroll(client, month="October")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_unknown_employee(client, admin):
    response = create_payroll(client, employee_id=999, month="October")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_mark_paid_and_filter(client, admin, employee, other_employee):
    first = create_payroll(client, employee_id=employee.id, month="October", work_year=2025).json()
    create_payroll(client, employee_id=other_employee.id, month="October", work_year=2025)
    headers = auth_headers(client, "ADM001")

    updated = client.patch(
        f"/api/v1/payroll/{first['id']}",
        json={"status": "paid", "payment_date": "13.11.2025"},
        headers=headers,
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["status"] == "paid"
    assert updated.json()["payment_date"] == "13.11.2025"

    paid = client.get("/api/v1/payroll?status=paid", headers=headers).json()
    assert [item["id"] for item in paid["items"]] == [first["id"]]

    october = client.get("/api/v1/payroll?month=october&work_year=2025", headers=headers).json()
    assert october["total"] == 2


def test_payroll_is_admin_only(client, manager, employee):
    headers = auth_headers(client, "MGR001")
    assert client.get("/api/v1/payroll", headers=headers).status_code == status.HTTP_403_FORBIDDEN
    response = client.post("/api/v1/payroll", json={"employee_id": employee.id, "month": "October"}, headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
