"""
Employee location service - geofence requests and their approval

Employees request a location per site; a manager or admin approves it.
Only approved locations gate clock-in. Approved locations are frozen for the
employee: changes go through a new request.
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.employee import Employee
from app.models.employee_location import EmployeeLocation, LocationStatus
from app.models.site import Site, SiteStatus
from app.models.work_record import WorkRecord
from app.schemas.employee_location import EmployeeLocationCreate, EmployeeLocationUpdate
from app.services.audit_service import log_audit
from app.services.site_service import get_site_or_404
from app.utils.datetime_utils import now_utc
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)

EDITABLE_STATUSES = (LocationStatus.PENDING.value, LocationStatus.REJECTED.value)


def _require_coordinates(location: EmployeeLocation) -> None:
    if location.allow_work_from_anywhere:
        return
    if location.latitude is None or location.longitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide location coordinates or enable 'Work from Anywhere'"
        )


def _get_active_site(db: Session, site_id: int) -> Site:
    site = get_site_or_404(db, site_id)
    if enum_to_str(site.status) != SiteStatus.ACTIVE.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Site '{site.name}' is not active"
        )
    return site


def get_location_or_404(db: Session, location_id: int) -> EmployeeLocation:
    location = db.query(EmployeeLocation).filter(EmployeeLocation.id == location_id).first()
    if not location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee location not found"
        )
    return location


def _get_own_editable_location(db: Session, location_id: int, employee: Employee, verb: str) -> EmployeeLocation:
    location = get_location_or_404(db, location_id)
    if location.employee_id != employee.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this location"
        )
    if enum_to_str(location.status) not in EDITABLE_STATUSES:
        detail = (
            "Approved locations cannot be edited. Please create a new location request."
            if verb == "edit"
            else "Approved locations cannot be deleted. Please contact an administrator."
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return location


def create_location_request(
    db: Session,
    employee: Employee,
    data: EmployeeLocationCreate
) -> EmployeeLocation:
    """
    Create a PENDING location request for the employee.

    Coordinates fall back to the site's coordinates; the radius falls back
    to DEFAULT_RADIUS_METERS.

    Raises:
        HTTPException: 404 unknown site, 400 inactive site or missing coordinates
    """
    site = _get_active_site(db, data.site_id)

    location = EmployeeLocation(
        employee_id=employee.id,
        site_id=site.id,
        address=data.address or site.address,
        latitude=data.latitude if data.latitude is not None else site.latitude,
        longitude=data.longitude if data.longitude is not None else site.longitude,
        radius_meters=(
            data.radius_meters if data.radius_meters is not None else settings.DEFAULT_RADIUS_METERS
        ),
        allow_work_from_anywhere=data.allow_work_from_anywhere,
        status=LocationStatus.PENDING.value,
        notes=data.notes,
    )
    _require_coordinates(location)

    db.add(location)
    db.commit()
    db.refresh(location)

    log_audit(
        db=db,
        actor_id=employee.id,
        action="LOCATION_REQUEST",
        entity_type="employee_locations",
        entity_id=location.id,
        meta={
            "site_id": site.id,
            "radius_meters": location.radius_meters,
            "allow_work_from_anywhere": location.allow_work_from_anywhere,
        }
    )
    return location


def update_location_request(
    db: Session,
    location_id: int,
    employee: Employee,
    data: EmployeeLocationUpdate
) -> EmployeeLocation:
    """Edit an own pending/rejected request. An edited request goes back to PENDING."""
    location = _get_own_editable_location(db, location_id, employee, "edit")

    changes = data.model_dump(exclude_unset=True)
    if "site_id" in changes:
        _get_active_site(db, changes["site_id"])
    for field, value in changes.items():
        setattr(location, field, value)

    _require_coordinates(location)
    location.status = LocationStatus.PENDING.value
    location.approved_by = None
    location.approved_at = None

    db.commit()
    db.refresh(location)

    log_audit(
        db=db,
        actor_id=employee.id,
        action="LOCATION_UPDATE",
        entity_type="employee_locations",
        entity_id=location.id,
        meta=changes,
    )
    return location


def delete_location_request(db: Session, location_id: int, employee: Employee) -> None:
    """Delete an own pending/rejected request."""
    location = _get_own_editable_location(db, location_id, employee, "delete")
    in_use = db.query(WorkRecord.id).filter(WorkRecord.location_id == location.id).first()
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Location has recorded work and cannot be deleted"
        )
    db.delete(location)
    db.commit()

    log_audit(
        db=db,
        actor_id=employee.id,
        action="LOCATION_DELETE",
        entity_type="employee_locations",
        entity_id=location_id,
    )


def approve_location(
    db: Session,
    location_id: int,
    approver: Employee,
    notes: Optional[str] = None
) -> EmployeeLocation:
    """
    Approve a PENDING location request.

    Raises:
        HTTPException: 404 not found, 400 not pending, 403 own request
    """
    location = get_location_or_404(db, location_id)

    if enum_to_str(location.status) != LocationStatus.PENDING.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot approve location with status {enum_to_str(location.status)}"
        )

    if location.employee_id == approver.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot approve own location request"
        )

    location.status = LocationStatus.APPROVED.value
    location.approved_by = approver.id
    location.approved_at = now_utc()
    if notes:
        location.notes = notes

    db.commit()
    db.refresh(location)

    log_audit(
        db=db,
        actor_id=approver.id,
        action="LOCATION_APPROVE",
        entity_type="employee_locations",
        entity_id=location.id,
        meta={"employee_id": location.employee_id, "site_id": location.site_id}
    )
    logger.info("Location %s approved for employee %s", location.id, location.employee_id)
    return location


def reject_location(
    db: Session,
    location_id: int,
    approver: Employee,
    notes: Optional[str] = None
) -> EmployeeLocation:
    """
    Reject a pending request, or revoke an approved one.

    Raises:
        HTTPException: 404 not found, 400 already rejected
    """
    location = get_location_or_404(db, location_id)

    if enum_to_str(location.status) == LocationStatus.REJECTED.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Location is already rejected"
        )

    previous = enum_to_str(location.status)
    location.status = LocationStatus.REJECTED.value
    location.approved_by = approver.id
    location.approved_at = now_utc()
    if notes:
        location.notes = notes

    db.commit()
    db.refresh(location)

    log_audit(
        db=db,
        actor_id=approver.id,
        action="LOCATION_REJECT",
        entity_type="employee_locations",
        entity_id=location.id,
        meta={"employee_id": location.employee_id, "previous_status": previous}
    )
    return location


def list_locations_for_employee(db: Session, employee_id: int) -> List[EmployeeLocation]:
    return (
        db.query(EmployeeLocation)
        .filter(EmployeeLocation.employee_id == employee_id)
        .order_by(EmployeeLocation.created_at.desc(), EmployeeLocation.id.desc())
        .all()
    )


def list_locations(db: Session, location_status: Optional[LocationStatus] = None) -> List[EmployeeLocation]:
    query = db.query(EmployeeLocation)
    if location_status is not None:
        query = query.filter(EmployeeLocation.status == enum_to_str(location_status))
    return query.order_by(EmployeeLocation.created_at.desc(), EmployeeLocation.id.desc()).all()


def list_approved_locations(db: Session, employee_id: int) -> List[EmployeeLocation]:
    return (
        db.query(EmployeeLocation)
        .filter(
            EmployeeLocation.employee_id == employee_id,
            EmployeeLocation.status == LocationStatus.APPROVED.value,
        )
        .all()
    )
