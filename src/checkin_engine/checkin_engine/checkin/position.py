from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from ..common.validators import require_coordinates
from ..core.exceptions import (
    PermissionDeniedError,
    PositionError,
    PositionTimeoutError,
    PositionUnavailableError,
    ValidationError,
)


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


class PositionSource(Protocol):
    async def get_current_position(self, *, high_accuracy: bool, timeout: float) -> Position:
        """Return the device position or raise a PositionError subclass."""

        raise NotImplementedError


# Browser GeolocationPositionError codes.
_ERROR_CODES: dict[Any, type[PositionError]] = {
    1: PermissionDeniedError,
    2: PositionUnavailableError,
    3: PositionTimeoutError,
    "permission_denied": PermissionDeniedError,
    "position_unavailable": PositionUnavailableError,
    "timeout": PositionTimeoutError,
}

_ERROR_MESSAGES: dict[type[PositionError], str] = {
    PermissionDeniedError: "Please allow location access",
    PositionUnavailableError: "Location information is unavailable",
    PositionTimeoutError: "Getting the location timed out, please try again",
}


class SubmittedPositionSource:
    """Position reported by the client device along with the check-in request.

    The payload is either ``{"latitude", "longitude", "accuracy"?}`` or
    ``{"error": <code>}`` where code is a geolocation error code (1/2/3) or name.
    """

    def __init__(self, payload: Optional[Mapping[str, Any]]):
        self._payload = dict(payload or {})

    async def get_current_position(self, *, high_accuracy: bool, timeout: float) -> Position:
        error = self._payload.get("error")
        if error is not None:
            exc_type = _ERROR_CODES.get(error, PositionUnavailableError)
            raise exc_type(_ERROR_MESSAGES[exc_type])

        if self._payload.get("latitude") is None or self._payload.get("longitude") is None:
            raise PositionUnavailableError(_ERROR_MESSAGES[PositionUnavailableError])
        try:
            lat, lng = require_coordinates(self._payload["latitude"], self._payload["longitude"])
        except ValidationError as exc:
            raise PositionUnavailableError(str(exc)) from exc

        accuracy = self._payload.get("accuracy")
        return Position(latitude=lat, longitude=lng, accuracy=float(accuracy) if accuracy is not None else None)
