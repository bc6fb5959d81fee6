"""
Employee schemas
"""
from datetime import date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import validate_password
from app.models.employee import Role


class EmployeeCreate(BaseModel):
    """Schema for creating an employee (admin)"""
    emp_code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = None
    role: Role = Role.EMPLOYEE
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    gst_registered: bool = False
    abn_registered: bool = False
    password: str
    join_date: Optional[date] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)


class EmployeeOut(BaseModel):
    """Schema for employee output"""
    id: int
    emp_code: str
    name: str
    email: Optional[str] = None
    role: str
    hourly_rate: Optional[Decimal] = None
    gst_registered: bool = False
    abn_registered: bool = False
    join_date: date
    active: bool

    model_config = ConfigDict(from_attributes=True)


class EmployeeListResponse(BaseModel):
    items: List[EmployeeOut]
    total: int
