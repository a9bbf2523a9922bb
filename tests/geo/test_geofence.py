import pytest

from src.checkin_engine.checkin_engine.geo.distance import haversine_meters
from src.checkin_engine.checkin_engine.geo.geofence import is_within_radius, validate_geofence
from src.checkin_engine.checkin_engine.locations.model import TargetLocation


@pytest.mark.parametrize("distance", [0, 1, 49, 50, 499, 500, 501, 1000, 2000])
@pytest.mark.parametrize("radius", [50, 500, 1000, 2000])
def test_within_range_matches_comparison(distance, radius):
    assert is_within_radius(distance, radius) == (distance <= radius)


def test_boundary_distance_is_within_range():
    target = TargetLocation(name="HQ", latitude=0.0, longitude=0.0, radius_meters=0)
    lat, lng = 0.002, 0.0
    distance = haversine_meters(lat, lng, 0.0, 0.0)

    on_edge = validate_geofence(lat, lng, TargetLocation("HQ", 0.0, 0.0, radius_meters=distance))
    shrunk = validate_geofence(lat, lng, TargetLocation("HQ", 0.0, 0.0, radius_meters=distance - 1))

    assert on_edge.within_range is True
    assert on_edge.distance_meters == on_edge.allowed_radius_meters == distance
    assert shrunk.within_range is False
    assert validate_geofence(0.0, 0.0, target).within_range is True


def test_result_reports_distance_and_radius():
    target = TargetLocation(name="Branch", latitude=0.0, longitude=0.0, radius_meters=500)
    result = validate_geofence(0.001, 0.0, target)

    assert result.allowed_radius_meters == 500
    assert result.distance_meters == haversine_meters(0.001, 0.0, 0.0, 0.0)
    assert result.within_range is True
