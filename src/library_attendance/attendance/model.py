from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from ..core.enums import AttendanceKind
from ..members.model import Member


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in or check-out scan.

    ``member_name`` is a copy taken at scan time and is never re-synced.
    """

    event_id: str
    member_id: str
    member_name: str
    timestamp: datetime
    kind: AttendanceKind

    @property
    def work_date(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class ScanResult:
    member: Member
    event: AttendanceEvent


@dataclass(frozen=True)
class TodayStats:
    check_ins: int
    check_outs: int
    currently_in: int


@dataclass(frozen=True)
class TodayView:
    work_date: date
    stats: TodayStats
    recent: Sequence[AttendanceEvent]


@dataclass(frozen=True)
class HistoryStats:
    check_ins: int
    check_outs: int
    unique_members: int
