import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# mysql | csv | memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "csv")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_tracker"),
}

CSV_DATA_DIR = os.getenv("CSV_DATA_DIR", "data")

# Check-ins per week: the counter never goes above CHECKIN_CAP.
CHECKIN_CAP = int(os.getenv("CHECKIN_CAP", "4"))
WEEKLY_GOAL = int(os.getenv("WEEKLY_GOAL", "4"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled (mysql backend), app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
