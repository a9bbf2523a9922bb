"""Ordered identity lookups: the first strategy that finds a staff member wins."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from .model import StaffMember
from .repository import StaffRepository

StaffLookup = Callable[[StaffRepository, str], Optional[StaffMember]]


def by_user_id(staff: StaffRepository, ref: str) -> Optional[StaffMember]:
    return staff.get_by_user_id(ref)


def by_staff_id(staff: StaffRepository, ref: str) -> Optional[StaffMember]:
    return staff.get_by_id(ref)


DEFAULT_LOOKUPS: tuple[StaffLookup, ...] = (by_user_id, by_staff_id)


def find_staff(
    staff: StaffRepository,
    ref: str,
    strategies: Sequence[StaffLookup] = DEFAULT_LOOKUPS,
) -> Optional[StaffMember]:
    for strategy in strategies:
        found = strategy(staff, ref)
        if found is not None:
            return found
    return None
