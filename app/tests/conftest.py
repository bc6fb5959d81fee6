"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("APP_ENV", "local")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from app.main import app
from app.db.base import Base
from app.core.deps import get_db
from app.tests.helpers import make_employee

# Import all models to ensure they're registered with Base.metadata
from app.models import (
    AuditLog,
    EmployeeLocation,
    Invoice,
    PayrollRecord,
    Role,
    Site,
    Task,
    WorkRecord,
)  # noqa


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return make_employee(db, "ADM001", "Site Admin", Role.ADMIN)


@pytest.fixture
def manager(db):
    return make_employee(db, "MGR001", "Mia Manager", Role.MANAGER)


@pytest.fixture
def employee(db):
    return make_employee(db, "EMP001", "Ana Cleaner", Role.EMPLOYEE, hourly_rate=32.50)


@pytest.fixture
def other_employee(db):
    return make_employee(db, "EMP002", "Ben Cleaner", Role.EMPLOYEE, hourly_rate=30)


@pytest.fixture
def site(db):
    """Active site in Sydney CBD"""
    site = Site(
        name="Town Hall Offices",
        address="483 George St, Sydney NSW 2000",
        client_name="City Facilities",
        latitude=-33.8731,
        longitude=151.2065,
        status="active",
    )
    db.add(site)
    db.commit()
    db.refresh(site)
    return site

