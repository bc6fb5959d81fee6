"""
Work site endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_roles, get_current_user
from app.models.employee import Role, Employee
from app.schemas.site import SiteCreate, SiteOut, SiteListResponse
from app.services.site_service import create_site, list_sites

router = APIRouter()


@router.post("", response_model=SiteOut, status_code=201)
async def create_site_endpoint(
    site_data: SiteCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_roles(Role.ADMIN))
):
    """Create a work site (ADMIN-only)"""
    return create_site(db, site_data, current_user.id)


@router.get("", response_model=SiteListResponse)
async def list_sites_endpoint(
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """List work sites; active only unless include_inactive"""
    items = list_sites(db, include_inactive=include_inactive)
    return SiteListResponse(items=items, total=len(items))
