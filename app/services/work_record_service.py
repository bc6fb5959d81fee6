"""
Work record service - clock in / clock out with geofence gating
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.employee import Employee
from app.models.work_record import WorkRecord
from app.services.audit_service import log_audit
from app.services.employee_location_service import list_approved_locations
from app.services.geofence import GeofenceCheck, GeofenceOutcome, check_clock_in_location
from app.services.geolocation import GeolocationErrorCode, user_message
from app.utils.datetime_utils import ensure_utc, hours_between, now_utc, today_local

logger = logging.getLogger(__name__)


def _geofence_rejection(check: GeofenceCheck) -> HTTPException:
    if check.outcome == GeofenceOutcome.NO_APPROVED_LOCATION:
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No approved work location. Please request a location for this site and wait for approval."
        )
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=(
            f"Out of range: you are {check.distance_meters:.0f} m from your approved location "
            f"(allowed radius {check.radius_meters:.0f} m)"
        )
    )


def clock_in(
    db: Session,
    employee: Employee,
    lat: Optional[float],
    lng: Optional[float],
    site_id: Optional[int] = None,
    location_error: Optional[GeolocationErrorCode] = None,
) -> WorkRecord:
    """
    Clock the employee in for today (business time zone).

    Raises:
        HTTPException: 400 when the device could not get a position, 403 when the
        geofence rejects the coordinate, 409 when today already has a record
    """
    if location_error is not None:
        logger.info("Clock-in without position for employee %s: %s", employee.id, location_error)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=user_message(location_error)
        )

    work_date = today_local()

    existing = db.query(WorkRecord).filter(
        WorkRecord.employee_id == employee.id,
        WorkRecord.work_date == work_date
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Leave already recorded for today" if existing.is_leave else "Already clocked in today"
        )

    approved = list_approved_locations(db, employee.id)
    check = check_clock_in_location(lat, lng, approved, site_id=site_id)
    if not check.allowed:
        if settings.ENFORCE_GEOFENCE:
            raise _geofence_rejection(check)
        logger.warning(
            "Geofence not enforced: employee %s clocked in with outcome %s (distance=%s)",
            employee.id, check.outcome.value, check.distance_meters,
        )

    if site_id is None and check.location_id is not None:
        matched = next((loc for loc in approved if loc.id == check.location_id), None)
        site_id = matched.site_id if matched else None

    record = WorkRecord(
        employee_id=employee.id,
        work_date=work_date,
        clock_in_time=now_utc(),
        hours_worked=0,
        is_leave=False,
        site_id=site_id,
        location_id=check.location_id,
        clock_in_lat=lat,
        clock_in_lng=lng,
        clock_in_distance_m=check.distance_meters,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent clock-in for employee %s on %s", employee.id, work_date)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already clocked in today"
        )
    db.refresh(record)

    log_audit(
        db=db,
        actor_id=employee.id,
        action="CLOCK_IN",
        entity_type="work_records",
        entity_id=record.id,
        meta={
            "work_date": work_date,
            "lat": lat,
            "lng": lng,
            "geofence": check.outcome,
            "distance_m": check.distance_meters,
        }
    )
    return record


def clock_out(
    db: Session,
    employee: Employee,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
) -> WorkRecord:
    """
    Close the employee's latest open work record and compute hours worked.

    Raises:
        HTTPException: 404 no clock-in, 409 already clocked out, 400 clock-out not after clock-in
    """
    record = (
        db.query(WorkRecord)
        .filter(
            WorkRecord.employee_id == employee.id,
            WorkRecord.is_leave.is_(False),
        )
        .order_by(WorkRecord.work_date.desc())
        .first()
    )
    if not record or record.clock_in_time is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Clock-in not found"
        )
    if record.clock_out_time is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already clocked out"
        )

    now = now_utc()
    if now <= ensure_utc(record.clock_in_time):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Clock-out time must be after clock-in time"
        )

    record.clock_out_time = now
    record.hours_worked = hours_between(record.clock_in_time, now)
    db.commit()
    db.refresh(record)

    log_audit(
        db=db,
        actor_id=employee.id,
        action="CLOCK_OUT",
        entity_type="work_records",
        entity_id=record.id,
        meta={"work_date": record.work_date, "hours_worked": record.hours_worked, "lat": lat, "lng": lng}
    )
    return record


def record_leave(db: Session, employee: Employee, work_date: date, leave_type: str) -> WorkRecord:
    """Record a leave day. Leave days never count toward hours or pay."""
    existing = db.query(WorkRecord).filter(
        WorkRecord.employee_id == employee.id,
        WorkRecord.work_date == work_date
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A work record already exists for {work_date}"
        )

    record = WorkRecord(
        employee_id=employee.id,
        work_date=work_date,
        hours_worked=0,
        is_leave=True,
        leave_type=leave_type,
    )
    db.add(record)
    db.commit()
    db.refresh(record)

    log_audit(
        db=db,
        actor_id=employee.id,
        action="LEAVE_RECORD",
        entity_type="work_records",
        entity_id=record.id,
        meta={"work_date": work_date, "leave_type": leave_type}
    )
    return record


def list_work_records(
    db: Session,
    employee_id: int,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
) -> List[WorkRecord]:
    """Work records of one employee ordered by day."""
    if from_date and to_date and from_date > to_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="from_date must be less than or equal to to_date"
        )

    query = db.query(WorkRecord).filter(WorkRecord.employee_id == employee_id)
    if from_date:
        query = query.filter(WorkRecord.work_date >= from_date)
    if to_date:
        query = query.filter(WorkRecord.work_date <= to_date)
    return query.order_by(WorkRecord.work_date).all()
