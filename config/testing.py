import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_test"),
}

HEADQUARTERS_LOCATION = {
    "name": "Headquarters",
    "latitude": 0.0,
    "longitude": 0.0,
}

UNASSIGNED_EMPLOYEE_MODE = "headquarters"

IP_LOOKUP_URL = "https://ip.test/json"
POSITION_TIMEOUT_SECONDS = 1.0

REMINDER_MAX = 2
REMINDER_INTERVAL_MINUTES = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
