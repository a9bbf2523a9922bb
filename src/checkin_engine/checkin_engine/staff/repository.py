from __future__ import annotations

from typing import Optional, Protocol

from .model import StaffMember


class StaffRepository(Protocol):
    def get_by_user_id(self, user_id: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def get_by_id(self, staff_id: str) -> Optional[StaffMember]:
        raise NotImplementedError
