import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_db"),
}

HEADQUARTERS_LOCATION = {
    "name": os.getenv("HQ_NAME", "Headquarters"),
    "latitude": float(os.getenv("HQ_LATITUDE", "25.0330")),
    "longitude": float(os.getenv("HQ_LONGITUDE", "121.5654")),
}

UNASSIGNED_EMPLOYEE_MODE = os.getenv("UNASSIGNED_EMPLOYEE_MODE", "headquarters")

IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "https://api.ipify.org?format=json")
POSITION_TIMEOUT_SECONDS = float(os.getenv("POSITION_TIMEOUT_SECONDS", "10"))

REMINDER_MAX = int(os.getenv("REMINDER_MAX", "2"))
REMINDER_INTERVAL_MINUTES = int(os.getenv("REMINDER_INTERVAL_MINUTES", "5"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
