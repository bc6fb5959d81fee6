"""
Tests for invoices and their derived status
"""
from decimal import Decimal

from fastapi import status

from app.models import AuditLog
from app.tests.helpers import auth_headers

INVOICE = {
    "invoice_number": "INV-1001",
    "client_name": "City Facilities",
    "amount": "1000.00",
    "gst": "100.00",
    "issue_date": "2025-10-03",
}


def create_invoice(client, **overrides):
    payload = dict(INVOICE, **overrides)
    return client.post("/api/v1/invoices", json=payload, headers=auth_headers(client, "ADM001"))


def list_invoices(client, as_of):
    return client.get("/api/v1/invoices", params={"as_of": as_of}, headers=auth_headers(client, "ADM001")).json()


def test_create_invoice_defaults(client, db, admin):
    response = create_invoice(client)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["due_date"] == "2025-11-15"
    assert Decimal(str(data["total_amount"])) == Decimal("1100")
    assert db.query(AuditLog).filter(AuditLog.action == "INVOICE_CREATE").count() == 1


def test_explicit_due_date(client, admin):
    response = create_invoice(client, due_date="2025-10-31")
    assert response.json()["due_date"] == "2025-10-31"


def test_due_date_before_issue_rejected(client, admin):
    assert create_invoice(client, due_date="2025-09-30").status_code == status.HTTP_400_BAD_REQUEST


def test_duplicate_invoice_number(client, admin):
    create_invoice(client)
    assert create_invoice(client).status_code == status.HTTP_409_CONFLICT


def test_status_derived_from_as_of(client, admin):
    create_invoice(client)
    assert list_invoices(client, "2025-10-20")["items"][0]["status"] == "pending"
    assert list_invoices(client, "2025-11-14")["items"][0]["status"] == "pending"
    overdue = list_invoices(client, "2025-11-15")
    assert overdue["items"][0]["status"] == "overdue"
    assert overdue["as_of"] == "2025-11-15"


def test_mark_received(client, admin):
    invoice_id = create_invoice(client).json()["id"]
    headers = auth_headers(client, "ADM001")

    response = client.post(
        f"/api/v1/invoices/{invoice_id}/mark-received",
        json={"payment_date": "2025-11-20"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "received"
    assert response.json()["payment_date"] == "2025-11-20"

    # Received stays received however late
    assert list_invoices(client, "2026-06-01")["items"][0]["status"] == "received"

    again = client.post(f"/api/v1/invoices/{invoice_id}/mark-received", headers=headers)
    assert again.status_code == status.HTTP_409_CONFLICT


def test_mark_received_unknown_invoice(client, admin):
    response = client.post("/api/v1/invoices/999/mark-received", headers=auth_headers(client, "ADM001"))
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_invoices_admin_only(client, manager):
    response = client.get("/api/v1/invoices", headers=auth_headers(client, "MGR001"))
    assert response.status_code == status.HTTP_403_FORBIDDEN
