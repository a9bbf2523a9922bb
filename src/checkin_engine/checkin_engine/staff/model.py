from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StaffMember:
    """Domain entity: an employee as seen by the check-in engine."""

    staff_id: str
    user_id: str
    name: str
    location_id: Optional[str] = None
    shift_id: Optional[int] = None
