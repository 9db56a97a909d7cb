"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

MEMBERS_KEY = "library_members"
ALL_ATTENDANCE_KEY = "all_attendance"
DAY_ATTENDANCE_KEY_PREFIX = "attendance_"

DEFAULT_MEMBER_ID_PREFIX = "LIB"
DEFAULT_RECENT_ACTIVITY_LIMIT = 10
DEFAULT_LOCK_TIMEOUT_SECONDS = 5.0
DEFAULT_LOCK_STALE_SECONDS = 30.0
DEFAULT_CSV_DATE_FORMAT = "%m/%d/%Y"
DEFAULT_CSV_TIME_FORMAT = "%I:%M:%S %p"

CSV_HEADER = ("Member ID", "Member Name", "Type", "Date", "Time")
