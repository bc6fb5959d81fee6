"""
Geofence validation for location-gated clock-in.

An approved EmployeeLocation is a circle (centre + radius in metres) the
employee may clock in from, unless it allows work from anywhere.
"""
import enum
import math
from typing import Any, Iterable, NamedTuple, Optional, Tuple

from app.utils.enums import enum_to_str

EARTH_RADIUS_METERS = 6_371_000

Coordinate = Tuple[float, float]


class GeofenceOutcome(str, enum.Enum):
    NO_APPROVED_LOCATION = "no_approved_location"
    ANYWHERE = "anywhere"
    WITHIN_RANGE = "within_range"
    OUT_OF_RANGE = "out_of_range"


class GeofenceCheck(NamedTuple):
    outcome: GeofenceOutcome
    location_id: Optional[int] = None
    distance_meters: Optional[float] = None
    radius_meters: Optional[float] = None

    @property
    def allowed(self) -> bool:
        return self.outcome in (GeofenceOutcome.ANYWHERE, GeofenceOutcome.WITHIN_RANGE)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two lat/lon points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_within_geofence(
    candidate: Coordinate,
    reference: Coordinate,
    radius_meters: float,
    allow_work_from_anywhere: bool = False,
) -> bool:
    """True when the candidate lies inside the circle, or unconditionally when work from anywhere is allowed."""
    if allow_work_from_anywhere:
        return True
    distance = haversine_distance(candidate[0], candidate[1], reference[0], reference[1])
    return distance <= radius_meters


def is_approved(location: Any) -> bool:
    return enum_to_str(getattr(location, "status", None)) == "approved"


def check_clock_in_location(
    lat: float,
    lng: float,
    locations: Iterable[Any],
    site_id: Optional[int] = None,
) -> GeofenceCheck:
    """
    Validate a clock-in coordinate against an employee's locations.

    Only approved locations (for the site, when one is given) are eligible;
    pending and rejected ones never count, however close they are. Reports
    the matching location, or the nearest one when out of range.
    """
    eligible = [
        loc for loc in locations
        if is_approved(loc) and (site_id is None or loc.site_id == site_id)
    ]
    if not eligible:
        return GeofenceCheck(GeofenceOutcome.NO_APPROVED_LOCATION)

    for loc in eligible:
        if loc.allow_work_from_anywhere:
            return GeofenceCheck(GeofenceOutcome.ANYWHERE, location_id=loc.id)

    nearest = None
    for loc in eligible:
        distance = haversine_distance(lat, lng, float(loc.latitude), float(loc.longitude))
        radius = float(loc.radius_meters)
        if distance <= radius:
            return GeofenceCheck(
                GeofenceOutcome.WITHIN_RANGE,
                location_id=loc.id,
                distance_meters=round(distance, 1),
                radius_meters=radius,
            )
        if nearest is None or distance < nearest[1]:
            nearest = (loc, distance)

    loc, distance = nearest
    return GeofenceCheck(
        GeofenceOutcome.OUT_OF_RANGE,
        location_id=loc.id,
        distance_meters=round(distance, 1),
        radius_meters=float(loc.radius_meters),
    )
