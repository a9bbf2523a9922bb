from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Union

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_POSITION_TIMEOUT_SECONDS
from ..core.enums import (
    AttemptState,
    CheckInAction,
    CheckInErrorKind,
    CheckInMode,
    PersistenceFailureReason,
    RecordStatus,
    SourceType,
)
from ..core.exceptions import (
    LocationResolutionError,
    NetworkError,
    PositionError,
    PositionTimeoutError,
    StorageError,
)
from ..geo.geofence import GeofenceResult, validate_geofence
from ..locations.model import TargetLocation, UnrestrictedTarget
from ..locations.resolver import LocationResolver
from .daily_state import DailyStateTracker
from .ip_lookup import PublicIpLookup
from .model import CheckInDetails, CheckInRecord, DailyState, NewCheckInRecord
from .position import Position, PositionSource
from .recorder import CheckInRecorder
from .session import CheckInSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    success: bool
    state: AttemptState
    action: Optional[CheckInAction] = None
    source_type: Optional[SourceType] = None
    distance_meters: Optional[int] = None
    allowed_radius_meters: Optional[int] = None
    location_name: Optional[str] = None
    error_kind: Optional[CheckInErrorKind] = None
    message: str = ""
    # "low" for the IP path, which never checks distance.
    assurance: str = "high"
    duplicate: bool = False
    record: Optional[CheckInRecord] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "state": self.state.value,
            "action": self.action.value if self.action else None,
            "source_type": self.source_type.value if self.source_type else None,
            "distance_meters": self.distance_meters,
            "allowed_radius_meters": self.allowed_radius_meters,
            "location_name": self.location_name,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "message": self.message,
            "assurance": self.assurance,
            "duplicate": self.duplicate,
            "record_id": self.record.record_id if self.record else None,
        }


def _failure(state: AttemptState, kind: CheckInErrorKind, message: str, **extra: Any) -> CheckInResult:
    logger.warning("Check-in failed at %s: %s (%s)", state.value, kind.value, message)
    return CheckInResult(success=False, state=state, error_kind=kind, message=message, **extra)


class CheckInOrchestrator:
    """Run one check-in attempt end to end and translate every failure into a result.

    Steps run strictly in sequence and nothing is retried. Only one attempt per
    user may be in flight on a given orchestrator; concurrent duplicates across
    orchestrators are rejected by the store's idempotency key.
    """

    def __init__(
        self,
        *,
        positions: PositionSource,
        resolver: LocationResolver,
        tracker: DailyStateTracker,
        recorder: CheckInRecorder,
        ip_lookup: PublicIpLookup,
        clock: Callable[[], datetime] = now_local,
        position_timeout: float = DEFAULT_POSITION_TIMEOUT_SECONDS,
    ):
        self._positions = positions
        self._resolver = resolver
        self._tracker = tracker
        self._recorder = recorder
        self._ip_lookup = ip_lookup
        self._clock = clock
        self._position_timeout = float(position_timeout)
        self._in_flight: set[str] = set()

    async def attempt_check_in(
        self,
        session: CheckInSession,
        user_id: Optional[str],
        mode: Union[CheckInMode, str] = CheckInMode.LOCATION,
        *,
        positions: Optional[PositionSource] = None,
    ) -> CheckInResult:
        if not user_id:
            return _failure(AttemptState.IDLE, CheckInErrorKind.MISSING_USER, "User information is incomplete")

        mode = CheckInMode(mode)
        if user_id in self._in_flight:
            return _failure(
                AttemptState.IDLE,
                CheckInErrorKind.ATTEMPT_IN_PROGRESS,
                "A check-in is already being processed",
            )

        self._in_flight.add(user_id)
        generation = session.generation
        try:
            if mode == CheckInMode.IP:
                return await self._ip_path(session, generation, user_id)
            return await self._location_path(session, generation, user_id, positions or self._positions)
        finally:
            self._in_flight.discard(user_id)

    async def get_daily_state(self, user_id: str) -> DailyState:
        lookup = await asyncio.to_thread(self._tracker.load, user_id)
        if lookup.error is not None:
            logger.warning("Returning empty daily state for %s after read error: %s", user_id, lookup.error)
        return lookup.state

    async def _acquire_position(self, positions: PositionSource) -> Position:
        try:
            return await asyncio.wait_for(
                positions.get_current_position(high_accuracy=True, timeout=self._position_timeout),
                timeout=self._position_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise PositionTimeoutError("Getting the location timed out, please try again") from exc

    async def _location_path(
        self,
        session: CheckInSession,
        generation: int,
        user_id: str,
        positions: PositionSource,
    ) -> CheckInResult:
        try:
            position = await self._acquire_position(positions)
        except PositionError as exc:
            return _failure(AttemptState.ACQUIRING_POSITION, exc.kind, str(exc))

        if not session.is_current(generation):
            return _failure(
                AttemptState.ACQUIRING_POSITION,
                CheckInErrorKind.SESSION_CLOSED,
                "Session ended before the position arrived",
            )

        try:
            target = await asyncio.to_thread(self._resolver.resolve, session.assigned_location_ref)
        except LocationResolutionError as exc:
            return _failure(AttemptState.RESOLVING, exc.kind, str(exc))
        except StorageError as exc:
            logger.error("Location directory unavailable: %s", exc, exc_info=True)
            return _failure(
                AttemptState.RESOLVING,
                CheckInErrorKind.PERSISTENCE_FAILURE,
                "Could not load check-in locations, please try again later",
            )

        geofence: Optional[GeofenceResult] = None
        if isinstance(target, UnrestrictedTarget):
            details = CheckInDetails(
                latitude=position.latitude,
                longitude=position.longitude,
                location_name=target.name,
            )
        else:
            geofence = validate_geofence(position.latitude, position.longitude, target)
            if not geofence.within_range:
                return _failure(
                    AttemptState.VALIDATING,
                    CheckInErrorKind.DISTANCE_EXCEEDED,
                    f"Too far from {target.name} ({geofence.distance_meters} m), "
                    f"allowed range is {geofence.allowed_radius_meters} m",
                    distance_meters=geofence.distance_meters,
                    allowed_radius_meters=geofence.allowed_radius_meters,
                    location_name=target.name,
                )
            details = self._location_details(position, target, geofence)

        return await self._record_and_refresh(
            session,
            generation,
            user_id,
            source_type=SourceType.LOCATION,
            details=details,
            geofence=geofence,
            # Unrestricted targets skip the distance check.
            assurance="high" if geofence is not None else "low",
        )

    async def _ip_path(self, session: CheckInSession, generation: int, user_id: str) -> CheckInResult:
        try:
            ip_address = await self._ip_lookup.get_public_ip()
        except NetworkError as exc:
            return _failure(AttemptState.LOOKING_UP_IP, exc.kind, str(exc))

        if not session.is_current(generation):
            return _failure(
                AttemptState.LOOKING_UP_IP,
                CheckInErrorKind.SESSION_CLOSED,
                "Session ended before the IP lookup finished",
            )

        logger.info("IP check-in for %s from %s (no distance validation)", user_id, ip_address)
        return await self._record_and_refresh(
            session,
            generation,
            user_id,
            source_type=SourceType.IP,
            details=CheckInDetails(ip_address=ip_address),
            geofence=None,
            assurance="low",
        )

    @staticmethod
    def _location_details(position: Position, target: TargetLocation, geofence: GeofenceResult) -> CheckInDetails:
        return CheckInDetails(
            latitude=position.latitude,
            longitude=position.longitude,
            distance_meters=geofence.distance_meters,
            location_name=target.name,
            target_latitude=target.latitude,
            target_longitude=target.longitude,
            target_name=target.name,
        )

    async def _record_and_refresh(
        self,
        session: CheckInSession,
        generation: int,
        user_id: str,
        *,
        source_type: SourceType,
        details: CheckInDetails,
        geofence: Optional[GeofenceResult],
        assurance: str,
    ) -> CheckInResult:
        distance = geofence.distance_meters if geofence else None
        radius = geofence.allowed_radius_meters if geofence else None

        # One reading of the clock decides both the day and the record timestamp.
        now = self._clock()
        lookup = await asyncio.to_thread(self._tracker.load, user_id, now=now)
        if lookup.error is not None:
            logger.warning("Daily state unavailable for %s, assuming check-in: %s", user_id, lookup.error)
        if lookup.state.completed:
            return _failure(
                AttemptState.RECORDING,
                CheckInErrorKind.NO_ACTION_AVAILABLE,
                "Check-in and check-out are already done for today",
                distance_meters=distance,
                allowed_radius_meters=radius,
            )
        action = lookup.state.next_action

        if not session.is_current(generation):
            return _failure(AttemptState.RECORDING, CheckInErrorKind.SESSION_CLOSED, "Session ended before recording")

        new_record = NewCheckInRecord(
            user_id=user_id,
            timestamp=now,
            source_type=source_type,
            status=RecordStatus.SUCCESS,
            action=action,
            details=details,
        )
        outcome = await asyncio.to_thread(self._recorder.record, new_record, session_user_id=session.user_id)
        if not outcome.ok:
            return _failure(
                AttemptState.RECORDING,
                CheckInErrorKind.PERSISTENCE_FAILURE,
                outcome.message,
                action=action,
                source_type=source_type,
                distance_meters=distance,
                allowed_radius_meters=radius,
                duplicate=outcome.reason == PersistenceFailureReason.DUPLICATE,
            )

        state = AttemptState.DONE
        message = f"{action.value} recorded"
        refreshed = await asyncio.to_thread(self._tracker.load, user_id, now=now)
        if refreshed.error is not None:
            logger.warning(
                "Recorded %s for %s but could not refresh daily state: %s", action.value, user_id, refreshed.error
            )
            state = AttemptState.REFRESHING
            message = f"{action.value} recorded, but today's status could not be refreshed"
        elif session.is_current(generation):
            session.daily_state = refreshed.state

        logger.info("%s succeeded for %s via %s", action.value, user_id, source_type.value)
        return CheckInResult(
            success=True,
            state=state,
            action=action,
            source_type=source_type,
            distance_meters=distance,
            allowed_radius_meters=radius,
            location_name=details.location_name,
            message=message,
            assurance=assurance,
            record=outcome.record,
        )
