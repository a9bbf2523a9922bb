from __future__ import annotations

from typing import Sequence

import pytest

from src.checkin_engine.checkin_engine.core.enums import GpsStatus, UnassignedEmployeeMode
from src.checkin_engine.checkin_engine.core.exceptions import LocationNotConfiguredError, LocationNotFoundError
from src.checkin_engine.checkin_engine.locations.lookup import by_id, by_name, find_location
from src.checkin_engine.checkin_engine.locations.model import (
    HeadquartersLocation,
    Location,
    TargetLocation,
    UnrestrictedTarget,
)
from src.checkin_engine.checkin_engine.locations.resolver import LocationResolver

HQ = HeadquartersLocation(name="Headquarters", latitude=25.0330, longitude=121.5654)

BRANCH = Location(
    location_id="loc-1",
    name="Taichung Branch",
    latitude=24.1477,
    longitude=120.6736,
    gps_status=GpsStatus.CONVERTED,
)
STORE = Location(
    location_id="loc-2",
    name="Night Market Store",
    latitude=22.6273,
    longitude=120.3014,
    gps_status=GpsStatus.CONVERTED,
    radius_meters=150,
)
PENDING = Location(
    location_id="loc-3",
    name="New Office",
    latitude=None,
    longitude=None,
    gps_status=GpsStatus.PENDING,
)
HALF_SET = Location(
    location_id="loc-4",
    name="Warehouse",
    latitude=23.0,
    longitude=None,
    gps_status=GpsStatus.CONVERTED,
)


class InMemoryLocations:
    def __init__(self, locations: Sequence[Location]):
        self._locations = list(locations)

    def list_all(self) -> Sequence[Location]:
        return list(self._locations)


class CountingRadius:
    def __init__(self, value: int = 500):
        self.value = value
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return self.value


def _resolver(locations=(BRANCH, STORE, PENDING, HALF_SET), *, radius=None, mode=UnassignedEmployeeMode.HEADQUARTERS):
    return LocationResolver(
        InMemoryLocations(locations),
        headquarters=HQ,
        default_radius=radius or CountingRadius(),
        unassigned_mode=mode,
    )


@pytest.mark.parametrize("ref", [None, "", "   "])
def test_unassigned_employee_resolves_to_headquarters(ref):
    target = _resolver().resolve(ref)

    assert target == TargetLocation(
        name="Headquarters",
        latitude=25.0330,
        longitude=121.5654,
        radius_meters=500,
        source="headquarters",
    )


def test_unrestricted_mode_is_explicit_marker():
    target = _resolver(mode=UnassignedEmployeeMode.UNRESTRICTED).resolve(None)
    assert isinstance(target, UnrestrictedTarget)


def test_unrestricted_mode_still_geofences_assigned_employees():
    target = _resolver(mode=UnassignedEmployeeMode.UNRESTRICTED).resolve("loc-1")
    assert isinstance(target, TargetLocation)
    assert target.name == "Taichung Branch"


def test_resolves_by_id_with_system_default_radius():
    target = _resolver(radius=CountingRadius(800)).resolve("loc-1")

    assert target.name == "Taichung Branch"
    assert (target.latitude, target.longitude) == (24.1477, 120.6736)
    assert target.radius_meters == 800
    assert target.source == "assigned"


def test_resolves_by_name_when_id_does_not_match():
    target = _resolver().resolve("Night Market Store")
    assert target.name == "Night Market Store"


def test_location_radius_overrides_system_default():
    radius = CountingRadius(800)
    target = _resolver(radius=radius).resolve("loc-2")

    assert target.radius_meters == 150
    assert radius.calls == 0


def test_default_radius_is_read_on_every_resolution():
    radius = CountingRadius(500)
    resolver = _resolver(radius=radius)

    assert resolver.resolve("loc-1").radius_meters == 500
    radius.value = 1200
    assert resolver.resolve("loc-1").radius_meters == 1200
    assert radius.calls == 2


def test_unknown_location_is_not_substituted():
    with pytest.raises(LocationNotFoundError) as exc:
        _resolver().resolve("loc-999")
    assert exc.value.location_ref == "loc-999"


@pytest.mark.parametrize("ref", ["loc-3", "loc-4"])
def test_location_without_usable_gps_is_not_configured(ref):
    with pytest.raises(LocationNotConfiguredError):
        _resolver().resolve(ref)


def test_not_found_and_not_configured_are_distinct_kinds():
    assert LocationNotFoundError.kind != LocationNotConfiguredError.kind


def test_lookup_strategies_individually():
    locations = [BRANCH, STORE]
    assert by_id("loc-2", locations) is STORE
    assert by_id("Night Market Store", locations) is None
    assert by_name("Night Market Store", locations) is STORE
    assert by_name("loc-2", locations) is None


def test_first_matching_strategy_wins():
    # A location whose name collides with another location's id.
    tricky = Location(
        location_id="loc-9",
        name="loc-1",
        latitude=0.0,
        longitude=0.0,
        gps_status=GpsStatus.CONVERTED,
    )
    locations = [tricky, BRANCH]

    assert find_location("loc-1", locations) is BRANCH
    assert find_location("loc-1", locations, strategies=(by_name, by_id)) is tricky
    assert find_location("nope", locations) is None
