"""
Work record (clock in / clock out) schemas
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from app.services.geolocation import GeolocationErrorCode
from app.utils.datetime_utils import iso_local


class ClockInRequest(BaseModel):
    """
    Clock-in payload. Either a coordinate pair, or the code of the geolocation
    failure the device reported after both acquisition attempts.
    """
    lat: Optional[float] = Field(None, ge=-90, le=90, description="GPS latitude")
    lng: Optional[float] = Field(None, ge=-180, le=180, description="GPS longitude")
    accuracy: Optional[float] = Field(None, gt=0, description="Accuracy in metres")
    site_id: Optional[int] = None
    location_error: Optional[GeolocationErrorCode] = None

    @model_validator(mode="after")
    def check_position(self):
        if self.location_error is None and (self.lat is None or self.lng is None):
            raise ValueError("lat and lng are required unless location_error is given")
        return self


class ClockOutRequest(BaseModel):
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)


class LeaveDayRequest(BaseModel):
    work_date: date
    leave_type: str = Field(default="annual", min_length=1, max_length=50)


class WorkRecordOut(BaseModel):
    """Work record output. Datetimes in the business time zone."""
    id: int
    employee_id: int
    work_date: date
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    hours_worked: Decimal
    is_leave: bool
    leave_type: Optional[str] = None
    site_id: Optional[int] = None
    location_id: Optional[int] = None
    clock_in_lat: Optional[Decimal] = None
    clock_in_lng: Optional[Decimal] = None
    clock_in_distance_m: Optional[Decimal] = None
    approval_status: str

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("clock_in_time", "clock_out_time", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class WorkRecordListResponse(BaseModel):
    items: List[WorkRecordOut]
    total: int
