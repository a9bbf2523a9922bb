from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import local_day_bounds, now_local
from ..core.enums import CheckInAction, RecordStatus
from ..core.exceptions import StorageError
from .model import CheckInRecord, DailyState
from .repository import CheckInRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyStateLookup:
    """A daily state plus the read error that forced an empty one, if any."""

    state: DailyState
    error: Optional[Exception] = None


def derive_daily_state(records: Iterable[CheckInRecord]) -> DailyState:
    """Partition today's successful records by action.

    The ``action`` field is authoritative; the earliest record of each action wins.
    """

    check_in: Optional[CheckInRecord] = None
    check_out: Optional[CheckInRecord] = None
    for r in sorted(records, key=lambda rec: rec.timestamp):
        if r.status != RecordStatus.SUCCESS:
            continue
        if r.action == CheckInAction.CHECK_IN and check_in is None:
            check_in = r
        elif r.action == CheckInAction.CHECK_OUT and check_out is None:
            check_out = r
    return DailyState(check_in=check_in, check_out=check_out)


class DailyStateTracker:
    def __init__(self, records: CheckInRepository, *, clock: Callable[[], datetime] = now_local):
        self._records = records
        self._clock = clock

    def load(self, user_id: str, *, now: Optional[datetime] = None) -> DailyStateLookup:
        start, end = local_day_bounds(now or self._clock())
        try:
            rows = self._records.list_for_user_between(user_id, start, end, status=RecordStatus.SUCCESS)
        except StorageError as exc:
            logger.warning("Could not load today's check-in records for %s: %s", user_id, exc)
            return DailyStateLookup(state=DailyState(), error=exc)
        return DailyStateLookup(state=derive_daily_state(rows))
