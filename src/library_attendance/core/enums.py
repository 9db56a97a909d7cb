from __future__ import annotations

from enum import Enum


class MembershipType(str, Enum):
    """Membership category chosen at registration."""

    STUDENT = "student"
    FACULTY = "faculty"
    STAFF = "staff"
    VISITOR = "visitor"
    PREMIUM = "premium"


class AttendanceKind(str, Enum):
    """Kind of a scan event, stored as-is in the attendance blobs."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
