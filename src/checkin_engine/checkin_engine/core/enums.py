from __future__ import annotations

from enum import Enum


class SourceType(str, Enum):
    """How a check-in was verified."""

    LOCATION = "location"
    IP = "ip"


class RecordStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class CheckInAction(str, Enum):
    """Semantic type of a check-in event."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class GpsStatus(str, Enum):
    """Whether a location address has been converted into coordinates."""

    CONVERTED = "converted"
    PENDING = "pending"


class CheckInMode(str, Enum):
    LOCATION = "location"
    IP = "ip"


class UnassignedEmployeeMode(str, Enum):
    """What to do with an employee who has no assigned location.

    HEADQUARTERS: geofence against the configured headquarters.
    UNRESTRICTED: record without any distance check (remote workers).
    """

    HEADQUARTERS = "headquarters"
    UNRESTRICTED = "unrestricted"


class AttemptState(str, Enum):
    IDLE = "idle"
    ACQUIRING_POSITION = "acquiring_position"
    LOOKING_UP_IP = "looking_up_ip"
    RESOLVING = "resolving"
    VALIDATING = "validating"
    RECORDING = "recording"
    REFRESHING = "refreshing"
    DONE = "done"


class CheckInErrorKind(str, Enum):
    """Structured failure reasons returned to the UI layer."""

    MISSING_USER = "missing_user"
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    LOCATION_NOT_FOUND = "location_not_found"
    LOCATION_NOT_CONFIGURED = "location_not_configured"
    DISTANCE_EXCEEDED = "distance_exceeded"
    NO_ACTION_AVAILABLE = "no_action_available"
    PERSISTENCE_FAILURE = "persistence_failure"
    NETWORK_FAILURE = "network_failure"
    ATTEMPT_IN_PROGRESS = "attempt_in_progress"
    SESSION_CLOSED = "session_closed"


class PersistenceFailureReason(str, Enum):
    IDENTITY_MISMATCH = "identity_mismatch"
    UNKNOWN_STAFF = "unknown_staff"
    DUPLICATE = "duplicate"
    STORAGE_ERROR = "storage_error"
