import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_DIR = os.getenv("STORAGE_DIR", "/var/lib/library-attendance")
STRICT_STORAGE = bool(int(os.getenv("STRICT_STORAGE", "1")))

LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", "5"))
LOCK_STALE_SECONDS = float(os.getenv("LOCK_STALE_SECONDS", "30"))

MEMBER_ID_PREFIX = os.getenv("MEMBER_ID_PREFIX", "LIB")
RECENT_ACTIVITY_LIMIT = int(os.getenv("RECENT_ACTIVITY_LIMIT", "10"))

CSV_DATE_FORMAT = os.getenv("CSV_DATE_FORMAT", "%m/%d/%Y")
CSV_TIME_FORMAT = os.getenv("CSV_TIME_FORMAT", "%I:%M:%S %p")
