from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from ..common.datetime_utils import is_same_local_day, now_local
from ..core.constants import DEFAULT_REMINDER_TEMPLATE, REMINDER_POLL_SECONDS, REMINDER_RESET_CHECK_SECONDS
from ..core.enums import CheckInAction
from .model import Reminder, ReminderState

logger = logging.getLogger(__name__)

ExpectedActionProvider = Callable[[], Awaitable[Optional[CheckInAction]]]

_ACTION_LABELS = {
    CheckInAction.CHECK_IN: "check-in",
    CheckInAction.CHECK_OUT: "check-out",
}


class ReminderScheduler:
    """Emit at most ``max_reminders`` reminders per day, spaced by ``interval_minutes``."""

    def __init__(
        self,
        state: ReminderState,
        *,
        notifier: Optional[Callable[[Reminder], None]] = None,
        clock: Callable[[], datetime] = now_local,
        template: str = DEFAULT_REMINDER_TEMPLATE,
        expected_action: Optional[ExpectedActionProvider] = None,
        reset_every: float = REMINDER_RESET_CHECK_SECONDS,
        poll_every: float = REMINDER_POLL_SECONDS,
    ):
        self._state = state
        self._notifier = notifier
        self._clock = clock
        self._template = template
        self._expected_action = expected_action
        self._reset_every = reset_every
        self._poll_every = poll_every
        self._tasks: list[asyncio.Task] = []

    @property
    def state(self) -> ReminderState:
        return self._state

    def check_and_send_reminder(self, expected_action: CheckInAction) -> bool:
        state = self._state
        now = self._clock()

        if state.reminder_count >= state.max_reminders:
            return False
        if state.last_reminder_time is not None and now - state.last_reminder_time < timedelta(
            minutes=state.interval_minutes
        ):
            return False

        action = CheckInAction(expected_action)
        reminder = Reminder(
            action=action,
            message=self._template.format(action=_ACTION_LABELS[action]),
            sent_at=now,
            sequence=state.reminder_count + 1,
        )
        logger.info("Sending %s reminder #%s", action.value, reminder.sequence)
        if self._notifier is not None:
            try:
                self._notifier(reminder)
            except Exception:
                # Undelivered reminders do not count against the daily limit.
                logger.exception("Failed to deliver %s reminder #%s", action.value, reminder.sequence)
                return False

        state.reminder_count = reminder.sequence
        state.last_reminder_time = now
        return True

    def reset_if_new_day(self) -> bool:
        state = self._state
        last = state.last_reminder_time
        # Nothing sent yet still counts as a fresh day.
        if last is not None and is_same_local_day(last, self._clock()):
            return False
        state.reminder_count = 0
        state.last_reminder_time = None
        return True

    async def start(self) -> None:
        if self._tasks:
            return
        self.reset_if_new_day()
        self._tasks.append(asyncio.create_task(self._reset_loop()))
        if self._expected_action is not None:
            self._tasks.append(asyncio.create_task(self._poll_loop()))

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def poll_once(self) -> bool:
        if self._expected_action is None:
            return False
        action = await self._expected_action()
        if action is None:
            return False
        return self.check_and_send_reminder(action)

    async def _reset_loop(self) -> None:
        while True:
            await asyncio.sleep(self._reset_every)
            self.reset_if_new_day()

    async def _poll_loop(self) -> None:
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Reminder check failed")
            await asyncio.sleep(self._poll_every)
