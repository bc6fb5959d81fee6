"""
Site service
"""
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.site import Site, SiteStatus
from app.schemas.site import SiteCreate
from app.services.audit_service import log_audit
from app.utils.enums import enum_to_str


def get_site_or_404(db: Session, site_id: int) -> Site:
    site = db.query(Site).filter(Site.id == site_id).first()
    if not site:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Site with id {site_id} not found"
        )
    return site


def create_site(db: Session, site_data: SiteCreate, actor_id: int) -> Site:
    site = Site(
        name=site_data.name.strip(),
        address=site_data.address,
        client_name=site_data.client_name,
        latitude=site_data.latitude,
        longitude=site_data.longitude,
        status=enum_to_str(site_data.status),
    )
    db.add(site)
    db.commit()
    db.refresh(site)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="SITE_CREATE",
        entity_type="sites",
        entity_id=site.id,
        meta={"name": site.name},
    )
    return site


def list_sites(db: Session, include_inactive: bool = False) -> List[Site]:
    query = db.query(Site)
    if not include_inactive:
        query = query.filter(Site.status == SiteStatus.ACTIVE.value)
    return query.order_by(Site.name).all()
