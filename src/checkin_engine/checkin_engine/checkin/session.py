from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..reminders.model import ReminderState
from .model import DailyState


@dataclass
class CheckInSession:
    """State owned by one signed-in caller (one browser tab, one test...).

    ``generation`` is bumped whenever the session is closed, so work that
    started under an older generation can tell its result is no longer wanted.
    """

    user_id: str
    assigned_location_ref: Optional[str] = None
    shift_id: Optional[int] = None
    daily_state: DailyState = field(default_factory=DailyState)
    reminders: ReminderState = field(default_factory=ReminderState)
    generation: int = 0
    closed: bool = False

    def is_current(self, generation: int) -> bool:
        return not self.closed and generation == self.generation

    def close(self) -> None:
        self.closed = True
        self.generation += 1
