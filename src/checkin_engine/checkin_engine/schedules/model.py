from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Schedule:
    """A per-day shift assignment overriding the employee's default shift."""

    schedule_id: int
    user_id: str
    work_date: date
    shift_id: int
