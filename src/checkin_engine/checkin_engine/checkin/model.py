from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import CheckInAction, RecordStatus, SourceType


def make_idempotency_key(user_id: str, day: date, action: CheckInAction) -> str:
    """One successful record per user, local day and action."""
    return f"{user_id}:{day.isoformat()}:{action.value}"


@dataclass(frozen=True)
class CheckInDetails:
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_meters: Optional[int] = None
    location_name: Optional[str] = None
    target_latitude: Optional[float] = None
    target_longitude: Optional[float] = None
    target_name: Optional[str] = None
    ip_address: Optional[str] = None


@dataclass(frozen=True)
class NewCheckInRecord:
    """A record about to be written; the store assigns the id."""

    user_id: str
    timestamp: datetime
    source_type: SourceType
    status: RecordStatus
    action: CheckInAction
    details: CheckInDetails = field(default_factory=CheckInDetails)

    @property
    def idempotency_key(self) -> Optional[str]:
        if self.status != RecordStatus.SUCCESS:
            return None
        return make_idempotency_key(self.user_id, self.timestamp.date(), self.action)


@dataclass(frozen=True)
class CheckInRecord:
    """Domain entity: one immutable check-in/check-out event."""

    record_id: str
    user_id: str
    timestamp: datetime
    source_type: SourceType
    status: RecordStatus
    action: CheckInAction
    details: CheckInDetails = field(default_factory=CheckInDetails)
    staff_id: Optional[str] = None


@dataclass(frozen=True)
class DailyState:
    """What a user already did today, derived from stored records."""

    check_in: Optional[CheckInRecord] = None
    check_out: Optional[CheckInRecord] = None

    @property
    def completed(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    @property
    def next_action(self) -> CheckInAction:
        if self.check_in is not None and self.check_out is None:
            return CheckInAction.CHECK_OUT
        return CheckInAction.CHECK_IN
