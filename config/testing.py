import os
import tempfile

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_DIR = os.getenv("STORAGE_DIR", os.path.join(tempfile.gettempdir(), "library-attendance-test"))
STRICT_STORAGE = False

LOCK_TIMEOUT_SECONDS = 1.0
LOCK_STALE_SECONDS = 30.0

MEMBER_ID_PREFIX = "LIB"
RECENT_ACTIVITY_LIMIT = 10

CSV_DATE_FORMAT = "%m/%d/%Y"
CSV_TIME_FORMAT = "%I:%M:%S %p"
