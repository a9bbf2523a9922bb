"""Great-circle distance between two coordinates."""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..core.constants import EARTH_RADIUS_METERS


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> int:
    """Haversine distance in metres, rounded to the nearest integer."""
    phi1, phi2 = radians(lat1), radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lng2 - lng1)

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return int(round(EARTH_RADIUS_METERS * c))
