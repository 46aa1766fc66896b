import os

SECRET_KEY = "test-secret"

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_tracker_test"),
}

CSV_DATA_DIR = os.getenv("CSV_DATA_DIR", "")

CHECKIN_CAP = int(os.getenv("CHECKIN_CAP", "4"))
WEEKLY_GOAL = int(os.getenv("WEEKLY_GOAL", "4"))

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
