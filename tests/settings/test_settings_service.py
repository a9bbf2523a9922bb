from __future__ import annotations

from typing import Optional

import pytest

from src.checkin_engine.checkin_engine.core.constants import CHECK_IN_DISTANCE_SETTING_KEY
from src.checkin_engine.checkin_engine.core.exceptions import StorageError, ValidationError
from src.checkin_engine.checkin_engine.settings.service import SystemSettingsService


class InMemorySettings:
    def __init__(self, values: Optional[dict[str, str]] = None):
        self.values = dict(values or {})
        self.writes: list[tuple[str, str]] = []

    def get_value(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set_value(self, key: str, value: str, *, description: Optional[str] = None) -> None:
        self.values[key] = value
        self.writes.append((key, value))


class BrokenSettings:
    def get_value(self, key: str) -> Optional[str]:
        raise StorageError("connection refused")

    def set_value(self, key: str, value: str, *, description: Optional[str] = None) -> None:
        raise StorageError("connection refused")


def test_missing_setting_uses_default():
    assert SystemSettingsService(InMemorySettings()).get_check_in_distance_limit() == 500


@pytest.mark.parametrize("raw", ["abc", "", "12.5", "10", "5000"])
def test_invalid_stored_value_uses_default(raw):
    svc = SystemSettingsService(InMemorySettings({CHECK_IN_DISTANCE_SETTING_KEY: raw}))
    assert svc.get_check_in_distance_limit() == 500


def test_stored_value_is_returned():
    svc = SystemSettingsService(InMemorySettings({CHECK_IN_DISTANCE_SETTING_KEY: " 800 "}))
    assert svc.get_check_in_distance_limit() == 800


def test_read_failure_uses_default():
    assert SystemSettingsService(BrokenSettings()).get_check_in_distance_limit() == 500


@pytest.mark.parametrize("meters", [50, 2000, "750"])
def test_set_accepts_values_in_range(meters):
    repo = InMemorySettings()
    svc = SystemSettingsService(repo)

    saved = svc.set_check_in_distance_limit(meters)

    assert saved == int(meters)
    assert repo.values[CHECK_IN_DISTANCE_SETTING_KEY] == str(int(meters))
    assert svc.get_check_in_distance_limit() == int(meters)


@pytest.mark.parametrize("meters", [49, 2001, -1, "far", None])
def test_set_rejects_out_of_range(meters):
    repo = InMemorySettings()
    with pytest.raises(ValidationError):
        SystemSettingsService(repo).set_check_in_distance_limit(meters)
    assert repo.writes == []


def test_initialize_defaults_only_when_missing():
    empty = InMemorySettings()
    SystemSettingsService(empty).initialize_defaults()
    assert empty.values == {CHECK_IN_DISTANCE_SETTING_KEY: "500"}

    configured = InMemorySettings({CHECK_IN_DISTANCE_SETTING_KEY: "1200"})
    SystemSettingsService(configured).initialize_defaults()
    assert configured.writes == []
