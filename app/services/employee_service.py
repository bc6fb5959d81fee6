"""
Employee service - business logic for employee management
"""
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate
from app.services.audit_service import log_audit
from app.utils.datetime_utils import today_local
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)


def get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id {employee_id} not found"
        )
    return employee


def create_employee(db: Session, employee_data: EmployeeCreate, actor_id: int) -> Employee:
    """
    Create a new employee

    Raises:
        HTTPException: 400 if the emp_code is taken
    """
    existing = db.query(Employee).filter(Employee.emp_code == employee_data.emp_code).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Employee with emp_code '{employee_data.emp_code}' already exists"
        )

    employee = Employee(
        emp_code=employee_data.emp_code,
        name=employee_data.name.strip(),
        email=employee_data.email,
        role=enum_to_str(employee_data.role),
        hourly_rate=employee_data.hourly_rate,
        gst_registered=employee_data.gst_registered,
        abn_registered=employee_data.abn_registered,
        password_hash=hash_password(employee_data.password),
        join_date=employee_data.join_date or today_local(),
        active=True,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="EMPLOYEE_CREATE",
        entity_type="employees",
        entity_id=employee.id,
        meta={"emp_code": employee.emp_code, "role": employee.role},
    )
    logger.info("Employee created: %s (%s)", employee.emp_code, employee.role)
    return employee


def list_employees(db: Session, active_only: bool = True) -> List[Employee]:
    query = db.query(Employee)
    if active_only:
        query = query.filter(Employee.active.is_(True))
    return query.order_by(Employee.name).all()
