"""
Workforce Ops Backend - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import (
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from app.core.logging import setup_logging
from app.db.init_db import bootstrap_initial_admin
from app.db.session import SessionLocal, create_sqlite_tables

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    try:
        parsed = urlparse(url)
        if parsed.scheme.startswith("sqlite"):
            return url
        if parsed.password:
            netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
            if parsed.port:
                netloc += f":{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc))
    except ValueError:
        return "***"
    return url


app = FastAPI(
    title="Workforce Ops Backend",
    description="Geofenced clock-in, timesheets, payroll and invoice tracking for site services",
    version=settings.VERSION or "1.0.0"
)

# Configure CORS - must be before other middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Validate prod settings and log DATABASE_URL so it can be checked against Alembic."""
    settings.validate_production()
    logger.info("DATABASE_URL (app): %s", _mask_database_url(settings.DATABASE_URL))
    logger.info("Business time zone: %s, geofence enforced: %s", settings.TZ, settings.ENFORCE_GEOFENCE)


@app.on_event("startup")
def startup_create_tables() -> None:
    create_sqlite_tables()


@app.on_event("startup")
def startup_bootstrap_admin() -> None:
    """Make sure the system always has at least one admin user."""
    db = SessionLocal()
    try:
        bootstrap_initial_admin(db)
    except OperationalError as e:
        # Tables might not exist yet
        if "no such table" in str(e).lower():
            logger.warning("Database tables not ready yet, skipping initial bootstrap")
        else:
            logger.error("Database error during admin bootstrap: %s", e)
        db.rollback()
    finally:
        db.close()


async def _handle_operational_error(request, exc: OperationalError):
    if "no such table" in str(exc).lower():
        return JSONResponse(
            status_code=500,
            content={"detail": "Run alembic upgrade head"},
        )
    return await generic_exception_handler(request, exc)


app.add_exception_handler(OperationalError, _handle_operational_error)
