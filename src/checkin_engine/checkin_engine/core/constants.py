"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000

DEFAULT_CHECK_IN_DISTANCE_METERS = 500
MIN_CHECK_IN_DISTANCE_METERS = 50
MAX_CHECK_IN_DISTANCE_METERS = 2000
CHECK_IN_DISTANCE_SETTING_KEY = "check_in_distance_limit"

DEFAULT_POSITION_TIMEOUT_SECONDS = 10.0

DEFAULT_MAX_REMINDERS = 2
DEFAULT_REMINDER_INTERVAL_MINUTES = 5
DEFAULT_REMINDER_GRACE_MINUTES = 5
REMINDER_RESET_CHECK_SECONDS = 60 * 60
REMINDER_POLL_SECONDS = 60
DEFAULT_REMINDER_TEMPLATE = "You have not recorded your {action} yet. Please remember to do it."

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"
