from __future__ import annotations

from datetime import datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def local_day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return ``[start_of_day, start_of_next_day)`` for the local day of ``moment``."""
    start = datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)
    return start, start + timedelta(days=1)


def is_same_local_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()
