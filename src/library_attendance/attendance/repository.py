from __future__ import annotations

from datetime import date
from typing import Callable, Protocol, Sequence

from .model import AttendanceEvent

EventBuilder = Callable[[Sequence[AttendanceEvent]], AttendanceEvent]


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_for_day(self, work_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_for_member(self, member_id: str) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def append_for_day(self, work_date: date, build: EventBuilder) -> AttendanceEvent:
        """Build an event from that day's events and append it to both the
        day snapshot and the full history, in one locked write."""

        raise NotImplementedError
