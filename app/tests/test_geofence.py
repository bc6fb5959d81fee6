"""
Tests for geofence distance and clock-in location checks
"""
from types import SimpleNamespace

from app.services.geofence import (
    GeofenceOutcome,
    check_clock_in_location,
    haversine_distance,
    is_within_geofence,
)

TOWN_HALL = (-33.8731, 151.2065)


def location(id=1, lat=TOWN_HALL[0], lng=TOWN_HALL[1], radius=50, anywhere=False, status="approved", site_id=1):
    return SimpleNamespace(
        id=id,
        latitude=lat,
        longitude=lng,
        radius_meters=radius,
        allow_work_from_anywhere=anywhere,
        status=status,
        site_id=site_id,
    )


def test_identical_points_are_zero_distance():
    assert haversine_distance(*TOWN_HALL, *TOWN_HALL) == 0
    assert is_within_geofence(TOWN_HALL, TOWN_HALL, 0)


def test_one_degree_of_latitude():
    distance = haversine_distance(0.0, 0.0, 1.0, 0.0)
    assert abs(distance - 111_195) / 111_195 < 0.01
    assert not is_within_geofence((1.0, 0.0), (0.0, 0.0), 50)


def test_work_from_anywhere_accepts_antipodes():
    assert is_within_geofence((-33.8731, 151.2065), (33.8731, -28.7935), 50, allow_work_from_anywhere=True)


def test_no_locations():
    check = check_clock_in_location(*TOWN_HALL, [])
    assert check.outcome == GeofenceOutcome.NO_APPROVED_LOCATION
    assert not check.allowed


def test_pending_and_rejected_locations_do_not_count():
    locations = [location(id=1, status="pending"), location(id=2, status="rejected")]
    check = check_clock_in_location(*TOWN_HALL, locations)
    assert check.outcome == GeofenceOutcome.NO_APPROVED_LOCATION


def test_within_range():
    # ~22 m north of the site
    check = check_clock_in_location(-33.8729, 151.2065, [location()])
    assert check.outcome == GeofenceOutcome.WITHIN_RANGE
    assert check.allowed
    assert check.location_id == 1
    assert 20 < check.distance_meters < 25


def test_out_of_range_reports_nearest_location():
    far = location(id=1, lat=-33.9000, lng=151.2065)
    near = location(id=2, lat=-33.8750, lng=151.2065)
    check = check_clock_in_location(*TOWN_HALL, [far, near])
    assert check.outcome == GeofenceOutcome.OUT_OF_RANGE
    assert not check.allowed
    assert check.location_id == 2
    assert check.radius_meters == 50
    assert check.distance_meters > 50


def test_anywhere_location_allows_any_coordinate():
    check = check_clock_in_location(51.5, -0.12, [location(id=3, anywhere=True, lat=None, lng=None)])
    assert check.outcome == GeofenceOutcome.ANYWHERE
    assert check.location_id == 3


def test_site_filter():
    other_site = location(id=1, site_id=2)
    assert check_clock_in_location(*TOWN_HALL, [other_site], site_id=1).outcome == GeofenceOutcome.NO_APPROVED_LOCATION
    assert check_clock_in_location(*TOWN_HALL, [other_site], site_id=2).outcome == GeofenceOutcome.WITHIN_RANGE
