"""
Tests for employee location requests and their approval
"""
import pytest
from fastapi import status

from app.models import AuditLog, EmployeeLocation, Site
from app.tests.helpers import auth_headers


@pytest.fixture
def site_without_coordinates(db):
    site = Site(name="Mobile Crew", client_name="Various", status="active")
    db.add(site)
    db.commit()
    db.refresh(site)
    return site


def request_location(client, emp_code, **payload):
    return client.post("/api/v1/employee-locations", json=payload, headers=auth_headers(client, emp_code))


def test_request_defaults_to_site_coordinates(client, employee, site):
    response = request_location(client, "EMP001", site_id=site.id)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "pending"
    assert data["employee_id"] == employee.id
    assert float(data["latitude"]) == pytest.approx(-33.8731)
    assert float(data["longitude"]) == pytest.approx(151.2065)
    assert data["radius_meters"] == 50
    assert data["address"] == site.address


def test_request_without_coordinates_rejected(client, employee, site_without_coordinates):
    response = request_location(client, "EMP001", site_id=site_without_coordinates.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Work from Anywhere" in response.json()["detail"]


def test_work_from_anywhere_needs_no_coordinates(client, employee, site_without_coordinates):
    response = request_location(client, "EMP001", site_id=site_without_coordinates.id, allow_work_from_anywhere=True)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["allow_work_from_anywhere"] is True


def test_request_for_inactive_site_rejected(client, db, employee, site):
    site.status = "inactive"
    db.commit()
    response = request_location(client, "EMP001", site_id=site.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_request_for_unknown_site(client, employee):
    response = request_location(client, "EMP001", site_id=999)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_approve_flow(client, db, employee, manager, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]

    response = client.post(
        f"/api/v1/employee-locations/{location_id}/approve",
        json={"notes": "Checked with site supervisor"},
        headers=auth_headers(client, "MGR001"),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "approved"
    assert data["approved_by"] == manager.id
    assert data["approved_at"] is not None
    assert data["notes"] == "Checked with site supervisor"

    again = client.post(f"/api/v1/employee-locations/{location_id}/approve", headers=auth_headers(client, "MGR001"))
    assert again.status_code == status.HTTP_400_BAD_REQUEST

    assert db.query(AuditLog).filter(AuditLog.action == "LOCATION_APPROVE").count() == 1


def test_employee_cannot_approve(client, employee, other_employee, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    response = client.post(f"/api/v1/employee-locations/{location_id}/approve", headers=auth_headers(client, "EMP002"))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_manager_cannot_approve_own_request(client, manager, site):
    location_id = request_location(client, "MGR001", site_id=site.id).json()["id"]
    response = client.post(f"/api/v1/employee-locations/{location_id}/approve", headers=auth_headers(client, "MGR001"))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_edit_pending_request(client, employee, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    response = client.patch(
        f"/api/v1/employee-locations/{location_id}",
        json={"radius_meters": 120, "notes": "Large car park"},
        headers=auth_headers(client, "EMP001"),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["radius_meters"] == 120
    assert response.json()["status"] == "pending"


def test_approved_location_cannot_be_edited_or_deleted(client, employee, manager, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    client.post(f"/api/v1/employee-locations/{location_id}/approve", headers=auth_headers(client, "MGR001"))
    headers = auth_headers(client, "EMP001")

    edit = client.patch(f"/api/v1/employee-locations/{location_id}", json={"radius_meters": 500}, headers=headers)
    assert edit.status_code == status.HTTP_400_BAD_REQUEST
    assert edit.json()["detail"] == "Approved locations cannot be edited. Please create a new location request."

    delete = client.delete(f"/api/v1/employee-locations/{location_id}", headers=headers)
    assert delete.status_code == status.HTTP_400_BAD_REQUEST
    assert delete.json()["detail"] == "Approved locations cannot be deleted. Please contact an administrator."


def test_rejected_request_edit_goes_back_to_pending(client, employee, manager, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    rejected = client.post(f"/api/v1/employee-locations/{location_id}/reject", headers=auth_headers(client, "MGR001"))
    assert rejected.json()["status"] == "rejected"

    edited = client.patch(
        f"/api/v1/employee-locations/{location_id}",
        json={"latitude": -33.8740, "longitude": 151.2070},
        headers=auth_headers(client, "EMP001"),
    )
    assert edited.status_code == status.HTTP_200_OK
    assert edited.json()["status"] == "pending"
    assert edited.json()["approved_by"] is None


def test_reject_can_revoke_approved_location(client, employee, manager, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    headers = auth_headers(client, "MGR001")
    client.post(f"/api/v1/employee-locations/{location_id}/approve", headers=headers)

    revoked = client.post(f"/api/v1/employee-locations/{location_id}/reject", headers=headers)
    assert revoked.status_code == status.HTTP_200_OK
    assert revoked.json()["status"] == "rejected"

    twice = client.post(f"/api/v1/employee-locations/{location_id}/reject", headers=headers)
    assert twice.status_code == status.HTTP_400_BAD_REQUEST


def test_only_owner_can_edit_or_delete(client, employee, other_employee, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    headers = auth_headers(client, "EMP002")
    assert client.patch(f"/api/v1/employee-locations/{location_id}", json={"notes": "x"}, headers=headers).status_code == 403
    assert client.delete(f"/api/v1/employee-locations/{location_id}", headers=headers).status_code == 403


def test_delete_pending_request(client, employee, site):
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]
    headers = auth_headers(client, "EMP001")
    response = client.delete(f"/api/v1/employee-locations/{location_id}", headers=headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/employee-locations/my", headers=headers).json()["total"] == 0


def test_lists(client, employee, other_employee, manager, site):
    first = request_location(client, "EMP001", site_id=site.id).json()["id"]
    request_location(client, "EMP002", site_id=site.id)
    client.post(f"/api/v1/employee-locations/{first}/approve", headers=auth_headers(client, "MGR001"))

    mine = client.get("/api/v1/employee-locations/my", headers=auth_headers(client, "EMP001")).json()
    assert [loc["id"] for loc in mine["items"]] == [first]

    assert client.get("/api/v1/employee-locations", headers=auth_headers(client, "EMP001")).status_code == 403

    manager_headers = auth_headers(client, "MGR001")
    assert client.get("/api/v1/employee-locations", headers=manager_headers).json()["total"] == 2
    pending = client.get("/api/v1/employee-locations?status=pending", headers=manager_headers).json()
    assert pending["total"] == 1
    assert pending["items"][0]["employee_id"] == other_employee.id


def test_edit_cannot_move_request_to_inactive_site(client, db, employee, site):
    closed = Site(name="Old Depot", client_name="City Facilities", latitude=-33.9, longitude=151.2, status="inactive")
    db.add(closed)
    db.commit()
    location_id = request_location(client, "EMP001", site_id=site.id).json()["id"]

    response = client.patch(
        f"/api/v1/employee-locations/{location_id}",
        json={"site_id": closed.id},
        headers=auth_headers(client, "EMP001"),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "not active" in response.json()["detail"]
    db.expire_all()
    assert db.get(EmployeeLocation, location_id).site_id == site.id


def test_zero_radius_is_rejected_not_defaulted(client, employee, site):
    response = request_location(client, "EMP001", site_id=site.id, radius_meters=0)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_explicit_radius_is_kept(client, employee, site):
    response = request_location(client, "EMP001", site_id=site.id, radius_meters=1)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["radius_meters"] == 1
