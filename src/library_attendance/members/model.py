from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MembershipType


@dataclass(frozen=True)
class Member:
    """Domain entity: a registered library patron.

    Note: plain data object, no storage access. Immutable after registration.
    """

    member_id: str
    name: str
    email: str
    membership_type: MembershipType
    registered_at: datetime


@dataclass(frozen=True)
class MemberAttendanceSummary:
    check_ins: int
    check_outs: int
    last_visit: Optional[datetime]


@dataclass(frozen=True)
class MemberStats:
    total: int
    by_type: dict[str, int]
