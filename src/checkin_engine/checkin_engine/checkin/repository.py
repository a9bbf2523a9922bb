from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from .model import CheckInRecord, NewCheckInRecord


class CheckInRepository(Protocol):
    def append(self, record: NewCheckInRecord, *, staff_id: Optional[str] = None) -> CheckInRecord:
        """Persist a new record.

        Raises DuplicateRecordError when ``record.idempotency_key`` is already
        taken, StorageError on any other store failure.
        """

        raise NotImplementedError

    def list_for_user_between(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        *,
        status: Optional[RecordStatus] = RecordStatus.SUCCESS,
    ) -> Sequence[CheckInRecord]:
        """Records with ``start <= timestamp < end``, oldest first."""

        raise NotImplementedError

    def list_recent_for_user(self, user_id: str, limit: int) -> Sequence[CheckInRecord]:
        raise NotImplementedError
