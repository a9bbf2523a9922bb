from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import CheckInAction, RecordStatus, SourceType
from ..core.exceptions import DuplicateRecordError, StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import CheckInDetails, CheckInRecord, NewCheckInRecord
from .repository import CheckInRepository

_COLUMNS = """
    record_id, user_id, staff_id, timestamp, source_type, status, action,
    latitude, longitude, distance, location_name,
    target_latitude, target_longitude, target_name, ip_address
"""


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _row_to_record(r: Dict[str, Any]) -> CheckInRecord:
    distance = r.get("distance")
    return CheckInRecord(
        record_id=str(r["record_id"]),
        user_id=str(r["user_id"]),
        staff_id=r.get("staff_id"),
        timestamp=r["timestamp"],
        source_type=SourceType(r["source_type"]),
        status=RecordStatus(r["status"]),
        action=CheckInAction(r["action"]),
        details=CheckInDetails(
            latitude=_opt_float(r.get("latitude")),
            longitude=_opt_float(r.get("longitude")),
            distance_meters=int(distance) if distance is not None else None,
            location_name=r.get("location_name"),
            target_latitude=_opt_float(r.get("target_latitude")),
            target_longitude=_opt_float(r.get("target_longitude")),
            target_name=r.get("target_name"),
            ip_address=r.get("ip_address"),
        ),
    )


class MySQLCheckInRepository(CheckInRepository):
    """Append-only store; ``idempotency_key`` has a UNIQUE index (NULL for failed records)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, record: NewCheckInRecord, *, staff_id: Optional[str] = None) -> CheckInRecord:
        record_id = str(uuid.uuid4())
        d = record.details
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO check_in_records(
                        record_id, user_id, staff_id, timestamp, source_type, status, action,
                        latitude, longitude, distance, location_name,
                        target_latitude, target_longitude, target_name, ip_address, idempotency_key
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record_id,
                        record.user_id,
                        staff_id,
                        record.timestamp,
                        record.source_type.value,
                        record.status.value,
                        record.action.value,
                        d.latitude,
                        d.longitude,
                        d.distance_meters,
                        d.location_name,
                        d.target_latitude,
                        d.target_longitude,
                        d.target_name,
                        d.ip_address,
                        record.idempotency_key,
                    ),
                )
        except StorageError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError(record.idempotency_key or "") from exc
            raise

        return CheckInRecord(
            record_id=record_id,
            user_id=record.user_id,
            staff_id=staff_id,
            timestamp=record.timestamp,
            source_type=record.source_type,
            status=record.status,
            action=record.action,
            details=record.details,
        )

    def list_for_user_between(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        *,
        status: Optional[RecordStatus] = RecordStatus.SUCCESS,
    ) -> Sequence[CheckInRecord]:
        clauses = ["user_id=%s", "timestamp >= %s", "timestamp < %s"]
        params: list[object] = [user_id, start, end]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM check_in_records WHERE {where} ORDER BY timestamp ASC",
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_recent_for_user(self, user_id: str, limit: int) -> Sequence[CheckInRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM check_in_records WHERE user_id=%s ORDER BY timestamp DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
