"""
Site schemas
"""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from app.models.site import SiteStatus


class SiteCreate(BaseModel):
    """Schema for creating a work site"""
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    client_name: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: SiteStatus = SiteStatus.ACTIVE


class SiteOut(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    client_name: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    status: str

    model_config = ConfigDict(from_attributes=True)


class SiteListResponse(BaseModel):
    items: List[SiteOut]
    total: int
