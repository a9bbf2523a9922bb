from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .checkin.daily_state import DailyStateTracker
from .checkin.ip_lookup import HttpxPublicIpLookup
from .checkin.mysql_checkin_repository import MySQLCheckInRepository
from .checkin.orchestrator import CheckInOrchestrator
from .checkin.position import SubmittedPositionSource
from .checkin.recorder import CheckInRecorder
from .checkin.session import CheckInSession
from .core.constants import (
    DEFAULT_IP_LOOKUP_URL,
    DEFAULT_MAX_REMINDERS,
    DEFAULT_POSITION_TIMEOUT_SECONDS,
    DEFAULT_REMINDER_INTERVAL_MINUTES,
)
from .core.enums import UnassignedEmployeeMode
from .database.connection import DBConfig, DatabaseConnection
from .locations.model import HeadquartersLocation
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.resolver import LocationResolver
from .reminders.model import ReminderState
from .reminders.policy import ReminderPolicy
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SystemSettingsService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .staff.lookup import find_staff
from .staff.mysql_staff_repository import MySQLStaffRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    records_repo: MySQLCheckInRepository
    locations_repo: MySQLLocationRepository
    settings_repo: MySQLSettingsRepository
    staff_repo: MySQLStaffRepository
    shifts_repo: MySQLShiftRepository
    schedules_repo: MySQLScheduleRepository

    settings_service: SystemSettingsService
    resolver: LocationResolver
    tracker: DailyStateTracker
    recorder: CheckInRecorder
    orchestrator: CheckInOrchestrator
    reminder_policy: ReminderPolicy

    reminder_max: int = DEFAULT_MAX_REMINDERS
    reminder_interval_minutes: int = DEFAULT_REMINDER_INTERVAL_MINUTES

    def open_session(self, user_id: str) -> CheckInSession:
        """Start a session for an authenticated user, preloading their assignment."""
        staff = find_staff(self.staff_repo, user_id)
        return CheckInSession(
            user_id=user_id,
            assigned_location_ref=staff.location_id if staff else None,
            shift_id=staff.shift_id if staff else None,
            reminders=ReminderState(
                max_reminders=self.reminder_max,
                interval_minutes=self.reminder_interval_minutes,
            ),
        )


def _headquarters_from(settings: ModuleType) -> HeadquartersLocation:
    hq = dict(getattr(settings, "HEADQUARTERS_LOCATION"))
    radius = hq.get("radius_meters")
    return HeadquartersLocation(
        name=str(hq.get("name", "Headquarters")),
        latitude=float(hq["latitude"]),
        longitude=float(hq["longitude"]),
        radius_meters=int(radius) if radius is not None else None,
    )


def build_container(*, settings: ModuleType, conn: Optional[DatabaseConnection] = None) -> Container:
    conn = conn or DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))

    records_repo = MySQLCheckInRepository(conn)
    locations_repo = MySQLLocationRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    staff_repo = MySQLStaffRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)

    settings_service = SystemSettingsService(settings_repo)
    resolver = LocationResolver(
        locations_repo,
        headquarters=_headquarters_from(settings),
        default_radius=settings_service.get_check_in_distance_limit,
        unassigned_mode=UnassignedEmployeeMode(getattr(settings, "UNASSIGNED_EMPLOYEE_MODE", "headquarters")),
    )
    tracker = DailyStateTracker(records_repo)
    recorder = CheckInRecorder(records_repo, staff_repo)
    orchestrator = CheckInOrchestrator(
        # Requests normally carry their own position; an empty payload reads as unavailable.
        positions=SubmittedPositionSource(None),
        resolver=resolver,
        tracker=tracker,
        recorder=recorder,
        ip_lookup=HttpxPublicIpLookup(getattr(settings, "IP_LOOKUP_URL", DEFAULT_IP_LOOKUP_URL)),
        position_timeout=float(getattr(settings, "POSITION_TIMEOUT_SECONDS", DEFAULT_POSITION_TIMEOUT_SECONDS)),
    )
    reminder_policy = ReminderPolicy(shifts_repo, schedules_repo)

    return Container(
        conn=conn,
        records_repo=records_repo,
        locations_repo=locations_repo,
        settings_repo=settings_repo,
        staff_repo=staff_repo,
        shifts_repo=shifts_repo,
        schedules_repo=schedules_repo,
        settings_service=settings_service,
        resolver=resolver,
        tracker=tracker,
        recorder=recorder,
        orchestrator=orchestrator,
        reminder_policy=reminder_policy,
        reminder_max=int(getattr(settings, "REMINDER_MAX", DEFAULT_MAX_REMINDERS)),
        reminder_interval_minutes=int(getattr(settings, "REMINDER_INTERVAL_MINUTES", DEFAULT_REMINDER_INTERVAL_MINUTES)),
    )
