from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Union

from ..core.enums import UnassignedEmployeeMode
from ..core.exceptions import LocationNotConfiguredError, LocationNotFoundError
from .lookup import DEFAULT_LOOKUPS, LocationLookup, find_location
from .model import HeadquartersLocation, TargetLocation, UnrestrictedTarget
from .repository import LocationRepository

logger = logging.getLogger(__name__)

ResolvedTarget = Union[TargetLocation, UnrestrictedTarget]


class LocationResolver:
    """Turn an employee's assigned location reference into a geofence target.

    ``default_radius`` is called on every resolution so that an administrator's
    change to the system distance limit applies to the very next attempt.
    """

    def __init__(
        self,
        locations: LocationRepository,
        *,
        headquarters: HeadquartersLocation,
        default_radius: Callable[[], int],
        unassigned_mode: UnassignedEmployeeMode = UnassignedEmployeeMode.HEADQUARTERS,
        lookups: Sequence[LocationLookup] = DEFAULT_LOOKUPS,
    ):
        self._locations = locations
        self._headquarters = headquarters
        self._default_radius = default_radius
        self._unassigned_mode = unassigned_mode
        self._lookups = tuple(lookups)

    @property
    def unassigned_mode(self) -> UnassignedEmployeeMode:
        return self._unassigned_mode

    def resolve(self, location_ref: Optional[str]) -> ResolvedTarget:
        ref = (location_ref or "").strip()
        if not ref:
            return self._resolve_unassigned()

        location = find_location(ref, self._locations.list_all(), self._lookups)
        if location is None:
            raise LocationNotFoundError(
                f"Assigned location '{ref}' was not found, please choose another location",
                location_ref=ref,
            )

        if not location.is_gps_ready:
            raise LocationNotConfiguredError(
                f"GPS coordinates for '{location.name}' are not configured yet, please contact an administrator",
                location_ref=ref,
            )

        radius = location.radius_meters if location.radius_meters is not None else self._default_radius()
        return TargetLocation(
            name=location.name,
            latitude=float(location.latitude),
            longitude=float(location.longitude),
            radius_meters=int(radius),
            source="assigned",
        )

    def _resolve_unassigned(self) -> ResolvedTarget:
        if self._unassigned_mode == UnassignedEmployeeMode.UNRESTRICTED:
            logger.info("No assigned location; unassigned-employee mode is unrestricted, skipping geofence")
            return UnrestrictedTarget()

        hq = self._headquarters
        radius = hq.radius_meters if hq.radius_meters is not None else self._default_radius()
        return TargetLocation(
            name=hq.name,
            latitude=hq.latitude,
            longitude=hq.longitude,
            radius_meters=int(radius),
            source="headquarters",
        )
