from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import PersistenceFailureReason
from ..core.exceptions import DuplicateRecordError, StorageError
from ..staff.lookup import find_staff
from ..staff.repository import StaffRepository
from .model import CheckInRecord, NewCheckInRecord
from .repository import CheckInRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordOutcome:
    ok: bool
    record: Optional[CheckInRecord] = None
    reason: Optional[PersistenceFailureReason] = None
    message: str = ""


class CheckInRecorder:
    """Persist exactly one check-in record.

    Never raises for store failures; the outcome says what went wrong.
    The one-success-per-day rule is enforced by the store's unique
    idempotency key, surfaced here as ``PersistenceFailureReason.DUPLICATE``.
    """

    def __init__(self, records: CheckInRepository, staff: StaffRepository):
        self._records = records
        self._staff = staff

    def record(self, new_record: NewCheckInRecord, *, session_user_id: Optional[str]) -> RecordOutcome:
        if not session_user_id or new_record.user_id != session_user_id:
            logger.warning(
                "Refusing check-in record: payload user %s does not match session user %s",
                new_record.user_id,
                session_user_id,
            )
            return RecordOutcome(
                ok=False,
                reason=PersistenceFailureReason.IDENTITY_MISMATCH,
                message="Unable to confirm user identity",
            )

        try:
            staff = find_staff(self._staff, session_user_id)
        except StorageError:
            logger.exception("Staff lookup failed for %s", session_user_id)
            return RecordOutcome(
                ok=False,
                reason=PersistenceFailureReason.STORAGE_ERROR,
                message="Unable to confirm employee identity",
            )
        if staff is None:
            return RecordOutcome(
                ok=False,
                reason=PersistenceFailureReason.UNKNOWN_STAFF,
                message="No employee record found, please contact an administrator",
            )

        distance = new_record.details.distance_meters
        if distance is not None:
            new_record = replace(new_record, details=replace(new_record.details, distance_meters=int(round(distance))))

        try:
            saved = self._records.append(new_record, staff_id=staff.staff_id)
        except DuplicateRecordError as exc:
            logger.warning("Duplicate check-in rejected: %s", exc.idempotency_key)
            return RecordOutcome(
                ok=False,
                reason=PersistenceFailureReason.DUPLICATE,
                message=f"A {new_record.action.value} has already been recorded today",
            )
        except StorageError:
            logger.exception("Failed to store check-in record for %s", new_record.user_id)
            return RecordOutcome(
                ok=False,
                reason=PersistenceFailureReason.STORAGE_ERROR,
                message="Unable to save the check-in record",
            )

        logger.info("Stored %s record %s for %s", saved.action.value, saved.record_id, saved.user_id)
        return RecordOutcome(ok=True, record=saved)
