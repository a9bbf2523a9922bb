from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..checkin.model import DailyState
from ..core.constants import DEFAULT_REMINDER_GRACE_MINUTES
from ..core.enums import CheckInAction
from ..schedules.repository import ScheduleRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository


class ReminderPolicy:
    """Decide which action, if any, is overdue for today's shift."""

    def __init__(
        self,
        shifts: ShiftRepository,
        schedules: Optional[ScheduleRepository] = None,
        *,
        grace_minutes: int = DEFAULT_REMINDER_GRACE_MINUTES,
    ):
        self._shifts = shifts
        self._schedules = schedules
        self._grace = timedelta(minutes=int(grace_minutes))

    def effective_shift(self, *, user_id: str, now: datetime, fallback_shift_id: Optional[int]) -> Optional[Shift]:
        if self._schedules:
            sc = self._schedules.get_for_user_and_date(user_id=user_id, work_date=now.date())
            if sc:
                return self._shifts.get_by_id(sc.shift_id)

        if fallback_shift_id:
            return self._shifts.get_by_id(fallback_shift_id)
        return None

    def overdue_action(self, *, shift: Optional[Shift], state: DailyState, now: datetime) -> Optional[CheckInAction]:
        # No shift (remote or freelance day) means nothing to remind about.
        if shift is None:
            return None

        today = now.date()
        shift_start = datetime.combine(today, shift.start_time)
        shift_end = datetime.combine(today, shift.end_time)

        if state.check_in is None and now > shift_start + self._grace:
            return CheckInAction.CHECK_IN
        if state.check_in is not None and state.check_out is None and now > shift_end + self._grace:
            return CheckInAction.CHECK_OUT
        return None

    def expected_action(
        self,
        *,
        user_id: str,
        state: DailyState,
        now: datetime,
        fallback_shift_id: Optional[int] = None,
    ) -> Optional[CheckInAction]:
        shift = self.effective_shift(user_id=user_id, now=now, fallback_shift_id=fallback_shift_id)
        return self.overdue_action(shift=shift, state=state, now=now)
