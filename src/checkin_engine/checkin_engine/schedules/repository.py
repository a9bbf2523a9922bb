from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_for_user_and_date(self, *, user_id: str, work_date: date) -> Optional[Schedule]:
        raise NotImplementedError
