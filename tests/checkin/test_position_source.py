from __future__ import annotations

import asyncio

import pytest

from src.checkin_engine.checkin_engine.checkin.position import Position, SubmittedPositionSource
from src.checkin_engine.checkin_engine.core.enums import CheckInErrorKind
from src.checkin_engine.checkin_engine.core.exceptions import (
    PermissionDeniedError,
    PositionTimeoutError,
    PositionUnavailableError,
)


def _read(payload):
    return asyncio.run(SubmittedPositionSource(payload).get_current_position(high_accuracy=True, timeout=10))


def test_returns_submitted_coordinates():
    assert _read({"latitude": "10.5", "longitude": 106.7, "accuracy": 12}) == Position(10.5, 106.7, 12.0)


@pytest.mark.parametrize(
    "code,exc_type,kind",
    [
        (1, PermissionDeniedError, CheckInErrorKind.PERMISSION_DENIED),
        ("permission_denied", PermissionDeniedError, CheckInErrorKind.PERMISSION_DENIED),
        (2, PositionUnavailableError, CheckInErrorKind.POSITION_UNAVAILABLE),
        (3, PositionTimeoutError, CheckInErrorKind.TIMEOUT),
        ("weird", PositionUnavailableError, CheckInErrorKind.POSITION_UNAVAILABLE),
    ],
)
def test_device_error_codes(code, exc_type, kind):
    with pytest.raises(exc_type) as info:
        _read({"error": code})
    assert info.value.kind == kind


@pytest.mark.parametrize(
    "payload",
    [None, {}, {"latitude": 10.0}, {"latitude": 95.0, "longitude": 0.0}, {"latitude": "x", "longitude": "y"}],
)
def test_missing_or_invalid_coordinates_are_unavailable(payload):
    with pytest.raises(PositionUnavailableError):
        _read(payload)
