from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import StaffMember
from .repository import StaffRepository


def _row_to_staff(r: Dict[str, Any]) -> StaffMember:
    shift_id = r.get("shift_id")
    return StaffMember(
        staff_id=str(r["staff_id"]),
        user_id=str(r["user_id"]),
        name=r["name"],
        location_id=str(r["location_id"]) if r.get("location_id") is not None else None,
        shift_id=int(shift_id) if shift_id is not None else None,
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT staff_id, user_id, name, location_id, shift_id FROM staff WHERE {column}=%s",
                (value,),
            )
            r = fetchone(cur)
            return _row_to_staff(r) if r else None

    def get_by_user_id(self, user_id: str) -> Optional[StaffMember]:
        return self._get_one("user_id", user_id)

    def get_by_id(self, staff_id: str) -> Optional[StaffMember]:
        return self._get_one("staff_id", staff_id)
