"""
Employee endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_roles, get_current_user
from app.models.employee import Role, Employee
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeListResponse
from app.services.employee_service import create_employee, list_employees, get_employee_or_404

router = APIRouter()


@router.post("", response_model=EmployeeOut, status_code=201)
async def create_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Create a new employee (ADMIN-only)"""
    return create_employee(db, employee_data, current_user.id)


@router.get("/me", response_model=EmployeeOut)
async def get_me_endpoint(
    current_user: Employee = Depends(get_current_user),
):
    """Current authenticated user's profile"""
    return current_user


@router.get("", response_model=EmployeeListResponse)
async def list_employees_endpoint(
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN, Role.MANAGER))
):
    """List employees (ADMIN/MANAGER)"""
    items = list_employees(db, active_only=active_only)
    return EmployeeListResponse(items=items, total=len(items))


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN, Role.MANAGER))
):
    return get_employee_or_404(db, employee_id)
