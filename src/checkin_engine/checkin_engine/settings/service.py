from __future__ import annotations

import logging

from ..common.validators import require_int_in_range
from ..core.constants import (
    CHECK_IN_DISTANCE_SETTING_KEY,
    DEFAULT_CHECK_IN_DISTANCE_METERS,
    MAX_CHECK_IN_DISTANCE_METERS,
    MIN_CHECK_IN_DISTANCE_METERS,
)
from ..core.exceptions import StorageError
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SystemSettingsService:
    """Use case: read and administer the process-wide check-in distance limit."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_check_in_distance_limit(self) -> int:
        """Current limit in metres; falls back to the default on any read problem."""
        try:
            raw = self._settings.get_value(CHECK_IN_DISTANCE_SETTING_KEY)
        except StorageError:
            logger.exception("Could not read check-in distance limit, using default")
            return DEFAULT_CHECK_IN_DISTANCE_METERS

        if raw is None:
            return DEFAULT_CHECK_IN_DISTANCE_METERS
        try:
            value = int(str(raw).strip())
        except ValueError:
            logger.warning("Stored check-in distance limit %r is not an integer, using default", raw)
            return DEFAULT_CHECK_IN_DISTANCE_METERS
        if not MIN_CHECK_IN_DISTANCE_METERS <= value <= MAX_CHECK_IN_DISTANCE_METERS:
            logger.warning("Stored check-in distance limit %s is out of range, using default", value)
            return DEFAULT_CHECK_IN_DISTANCE_METERS
        return value

    def set_check_in_distance_limit(self, meters: object) -> int:
        value = require_int_in_range(
            meters,
            "Check-in distance limit",
            minimum=MIN_CHECK_IN_DISTANCE_METERS,
            maximum=MAX_CHECK_IN_DISTANCE_METERS,
        )
        self._settings.set_value(
            CHECK_IN_DISTANCE_SETTING_KEY,
            str(value),
            description="Check-in distance limit (meters)",
        )
        logger.info("Check-in distance limit set to %s m", value)
        return value

    def initialize_defaults(self) -> None:
        if self._settings.get_value(CHECK_IN_DISTANCE_SETTING_KEY) is None:
            self.set_check_in_distance_limit(DEFAULT_CHECK_IN_DISTANCE_METERS)
