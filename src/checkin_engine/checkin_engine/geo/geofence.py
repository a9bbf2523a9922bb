from __future__ import annotations

from dataclasses import dataclass

from ..locations.model import TargetLocation
from .distance import haversine_meters


@dataclass(frozen=True)
class GeofenceResult:
    distance_meters: int
    allowed_radius_meters: int
    within_range: bool


def is_within_radius(distance_meters: int, radius_meters: int) -> bool:
    # The boundary itself counts as inside.
    return distance_meters <= radius_meters


def validate_geofence(latitude: float, longitude: float, target: TargetLocation) -> GeofenceResult:
    distance = haversine_meters(latitude, longitude, target.latitude, target.longitude)
    radius = int(target.radius_meters)
    return GeofenceResult(
        distance_meters=distance,
        allowed_radius_meters=radius,
        within_range=is_within_radius(distance, radius),
    )
