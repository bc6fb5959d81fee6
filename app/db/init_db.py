"""
Database initialization helpers
"""
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import hash_password
from app.models.employee import Employee, Role
from app.utils.datetime_utils import today_local

logger = logging.getLogger(__name__)

INITIAL_ADMIN_EMP_CODE = "ADM-001"


def bootstrap_initial_admin(db: Session) -> bool:
    """
    Create the initial admin user when no admin exists.

    Returns True when a user was created.
    """
    admin_exists = db.query(Employee).filter(
        (Employee.emp_code == INITIAL_ADMIN_EMP_CODE) |
        (Employee.role == Role.ADMIN.value)
    ).first()
    if admin_exists:
        logger.info("Admin user already exists, skipping initial bootstrap")
        return False

    initial_admin = Employee(
        emp_code=INITIAL_ADMIN_EMP_CODE,
        name="System Administrator",
        email=settings.INITIAL_ADMIN_EMAIL,
        role=Role.ADMIN.value,
        password_hash=hash_password(settings.INITIAL_ADMIN_PASSWORD),
        join_date=today_local(),
        active=True,
    )
    db.add(initial_admin)
    db.commit()

    logger.info("Initial admin user created: emp_code=%s", INITIAL_ADMIN_EMP_CODE)
    logger.info("Password: [set via INITIAL_ADMIN_PASSWORD environment variable]")
    return True
