from __future__ import annotations

from typing import Protocol, Sequence

from .model import Location


class LocationRepository(Protocol):
    def list_all(self) -> Sequence[Location]:
        raise NotImplementedError
