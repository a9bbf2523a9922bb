"""Ordered lookup strategies for matching a location reference.

Each strategy is tried in sequence and the first match wins.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from .model import Location

LocationLookup = Callable[[str, Sequence[Location]], Optional[Location]]


def by_id(ref: str, locations: Sequence[Location]) -> Optional[Location]:
    return next((loc for loc in locations if loc.location_id == ref), None)


def by_name(ref: str, locations: Sequence[Location]) -> Optional[Location]:
    return next((loc for loc in locations if loc.name == ref), None)


DEFAULT_LOOKUPS: tuple[LocationLookup, ...] = (by_id, by_name)


def find_location(
    ref: str,
    locations: Sequence[Location],
    strategies: Sequence[LocationLookup] = DEFAULT_LOOKUPS,
) -> Optional[Location]:
    for strategy in strategies:
        found = strategy(ref, locations)
        if found is not None:
            return found
    return None
