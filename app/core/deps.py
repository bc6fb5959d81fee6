"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.core.security import decode_token
from app.models.employee import Employee, Role


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _employee_id_from_token(token: str) -> int:
    """The token's 'sub' claim as an employee id; 401 when missing or malformed."""
    try:
        return int(decode_token(token)["sub"])
    except (ValueError, TypeError, KeyError):
        raise _unauthorized("Invalid authentication credentials")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Employee:
    """
    Employee behind the bearer token. Inactive employees get 403 even with a valid token.
    """
    employee_id = _employee_id_from_token(credentials.credentials)

    employee = db.get(Employee, employee_id)
    if employee is None:
        raise _unauthorized("User not found")

    if not employee.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return employee


def is_supervisor(user: Employee) -> bool:
    """ADMIN or MANAGER: may approve locations, manage tasks and view other employees' records."""
    return user.role in (Role.ADMIN, Role.MANAGER)


def require_roles(*allowed_roles: Role):
    """
    Dependency factory for role-based access control

    Usage:
        @router.get("/admin-only")
        async def admin_endpoint(user: Employee = Depends(require_roles(Role.ADMIN))):
            ...
    """
    def role_checker(current_user: Employee = Depends(get_current_user)) -> Employee:
        # ADMIN passes every role guard
        if current_user.role == Role.ADMIN:
            return current_user

        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {[r.value for r in allowed_roles]}"
            )
        return current_user
    return role_checker
