"""
Employee location endpoints: geofence requests and their approval
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_roles
from app.models.employee import Employee, Role
from app.models.employee_location import LocationStatus
from app.schemas.employee_location import (
    EmployeeLocationCreate,
    EmployeeLocationUpdate,
    EmployeeLocationOut,
    EmployeeLocationListResponse,
    LocationActionRequest,
)
from app.services.employee_location_service import (
    create_location_request,
    update_location_request,
    delete_location_request,
    approve_location,
    reject_location,
    list_locations_for_employee,
    list_locations,
)

router = APIRouter()


@router.post("", response_model=EmployeeLocationOut, status_code=201)
async def create_location_endpoint(
    data: EmployeeLocationCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Request a work location for a site. Starts PENDING."""
    return create_location_request(db, current_user, data)


@router.get("/my", response_model=EmployeeLocationListResponse)
async def my_locations_endpoint(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    items = list_locations_for_employee(db, current_user.id)
    return EmployeeLocationListResponse(items=items, total=len(items))


@router.get("", response_model=EmployeeLocationListResponse)
async def list_locations_endpoint(
    location_status: Optional[LocationStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.MANAGER, Role.ADMIN))
):
    """All location requests, optionally filtered by status (MANAGER/ADMIN)"""
    items = list_locations(db, location_status=location_status)
    return EmployeeLocationListResponse(items=items, total=len(items))


@router.patch("/{location_id}", response_model=EmployeeLocationOut)
async def update_location_endpoint(
    location_id: int,
    data: EmployeeLocationUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Edit an own pending or rejected request"""
    return update_location_request(db, location_id, current_user, data)


@router.delete("/{location_id}", status_code=204)
async def delete_location_endpoint(
    location_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Delete an own pending or rejected request"""
    delete_location_request(db, location_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{location_id}/approve", response_model=EmployeeLocationOut)
async def approve_location_endpoint(
    location_id: int,
    action: Optional[LocationActionRequest] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.MANAGER, Role.ADMIN))
):
    return approve_location(db, location_id, current_user, notes=action.notes if action else None)


@router.post("/{location_id}/reject", response_model=EmployeeLocationOut)
async def reject_location_endpoint(
    location_id: int,
    action: Optional[LocationActionRequest] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.MANAGER, Role.ADMIN))
):
    return reject_location(db, location_id, current_user, notes=action.notes if action else None)
