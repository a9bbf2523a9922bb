from __future__ import annotations

from ..core.exceptions import ValidationError


def require_int_in_range(value: object, field_name: str, *, minimum: int, maximum: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < minimum or number > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")
    return number


def require_coordinates(latitude: object, longitude: object) -> tuple[float, float]:
    try:
        lat = float(latitude)  # type: ignore[arg-type]
        lng = float(longitude)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("latitude/longitude must be numbers")
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lng <= 180.0:
        raise ValidationError("latitude/longitude out of range")
    return lat, lng
