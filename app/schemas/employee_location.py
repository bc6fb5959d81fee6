"""
Employee location (geofence) schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.utils.datetime_utils import iso_local


class EmployeeLocationCreate(BaseModel):
    """Location request by an employee. Coordinates default to the site's when omitted."""
    site_id: int
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius_meters: Optional[int] = Field(None, gt=0, le=100000, description="Defaults to DEFAULT_RADIUS_METERS")
    allow_work_from_anywhere: bool = False
    notes: Optional[str] = None


class EmployeeLocationUpdate(BaseModel):
    """Edit of a pending or rejected location request; only provided fields change."""
    site_id: Optional[int] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius_meters: Optional[int] = Field(None, gt=0, le=100000)
    allow_work_from_anywhere: Optional[bool] = None
    notes: Optional[str] = None


class LocationActionRequest(BaseModel):
    """Schema for approve/reject"""
    notes: Optional[str] = None


class EmployeeLocationOut(BaseModel):
    id: int
    employee_id: int
    site_id: int
    address: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    radius_meters: int
    allow_work_from_anywhere: bool
    status: str
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("approved_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class EmployeeLocationListResponse(BaseModel):
    items: List[EmployeeLocationOut]
    total: int
