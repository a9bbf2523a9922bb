from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import GpsStatus


@dataclass(frozen=True)
class Location:
    """A check-in location from the directory (headquarters, branch, store...)."""

    location_id: str
    name: str
    latitude: Optional[float]
    longitude: Optional[float]
    gps_status: GpsStatus
    radius_meters: Optional[int] = None
    address: Optional[str] = None

    @property
    def is_gps_ready(self) -> bool:
        return (
            self.gps_status == GpsStatus.CONVERTED
            and self.latitude is not None
            and self.longitude is not None
        )


@dataclass(frozen=True)
class TargetLocation:
    """Resolved geofence center."""

    name: str
    latitude: float
    longitude: float
    radius_meters: int
    source: str = "assigned"


@dataclass(frozen=True)
class HeadquartersLocation:
    """Static fallback location configured once per deployment."""

    name: str
    latitude: float
    longitude: float
    radius_meters: Optional[int] = None


@dataclass(frozen=True)
class UnrestrictedTarget:
    """Marker returned when an unassigned employee is exempt from geofencing."""

    name: str = "unrestricted"
