from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_MAX_REMINDERS, DEFAULT_REMINDER_INTERVAL_MINUTES
from ..core.enums import CheckInAction


@dataclass
class ReminderState:
    """Per-session reminder bookkeeping, owned by the caller."""

    reminder_count: int = 0
    last_reminder_time: Optional[datetime] = None
    max_reminders: int = DEFAULT_MAX_REMINDERS
    interval_minutes: int = DEFAULT_REMINDER_INTERVAL_MINUTES


@dataclass(frozen=True)
class Reminder:
    action: CheckInAction
    message: str
    sent_at: datetime
    sequence: int
