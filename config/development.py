import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Directory holding one JSON blob per key (members, history, day snapshots)
STORAGE_DIR = os.getenv("STORAGE_DIR", "var/storage")

# Corrupt blobs: reset to empty (False) or raise CorruptStorageError (True)
STRICT_STORAGE = bool(int(os.getenv("STRICT_STORAGE", "0")))

LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", "5"))
LOCK_STALE_SECONDS = float(os.getenv("LOCK_STALE_SECONDS", "30"))

MEMBER_ID_PREFIX = os.getenv("MEMBER_ID_PREFIX", "LIB")
RECENT_ACTIVITY_LIMIT = int(os.getenv("RECENT_ACTIVITY_LIMIT", "10"))

CSV_DATE_FORMAT = os.getenv("CSV_DATE_FORMAT", "%m/%d/%Y")
CSV_TIME_FORMAT = os.getenv("CSV_TIME_FORMAT", "%I:%M:%S %p")
