from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import GpsStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Location
from .repository import LocationRepository


def _as_float(value: Any):
    return float(value) if value is not None else None


def _row_to_location(r: Dict[str, Any]) -> Location:
    radius = r.get("check_in_radius")
    return Location(
        location_id=str(r["location_id"]),
        name=r["name"],
        latitude=_as_float(r.get("latitude")),
        longitude=_as_float(r.get("longitude")),
        gps_status=GpsStatus(r.get("gps_status") or GpsStatus.PENDING.value),
        radius_meters=int(radius) if radius is not None else None,
        address=r.get("address"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, address, latitude, longitude, gps_status, check_in_radius
                FROM locations
                ORDER BY name
                """
            )
            return [_row_to_location(r) for r in fetchall(cur)]
