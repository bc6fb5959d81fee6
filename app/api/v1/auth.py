"""
Authentication endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.core.security import verify_password, create_access_token
from app.models.employee import Employee
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.audit_service import log_audit

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token

    Validates emp_code and password, rejects inactive employees.
    """
    employee = db.query(Employee).filter(Employee.emp_code == login_data.emp_code).first()

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid employee code or password"
        )

    if not employee.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    if employee.password_hash is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No password set for this account"
        )

    if not verify_password(login_data.password, employee.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid employee code or password"
        )

    # JWT 'sub' claim must be a string
    token_data = {
        "sub": str(employee.id),
        "emp_code": employee.emp_code,
        "role": employee.role,
    }
    access_token = create_access_token(data=token_data)

    # A failed audit write must not fail the login
    try:
        log_audit(
            db=db,
            actor_id=employee.id,
            action="AUTH_LOGIN_SUCCESS",
            entity_type="auth",
            meta={"emp_code": employee.emp_code, "role": employee.role}
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Failed to log audit for login: %s", e)

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        employee_id=employee.id,
        role=employee.role,
    )
