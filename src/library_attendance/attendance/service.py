from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import generate_event_id
from ..core.constants import DEFAULT_RECENT_ACTIVITY_LIMIT
from ..core.enums import AttendanceKind
from ..core.exceptions import MemberNotFoundError, ValidationError
from ..members.repository import MemberRepository
from .derivation import derive_kind
from .model import AttendanceEvent, HistoryStats, ScanResult, TodayStats, TodayView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: scan a member code, read today's activity and the history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        *,
        recent_limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT,
    ):
        self._attendance = attendance
        self._members = members
        self._recent_limit = int(recent_limit)

    def scan(self, code: str, *, now: Optional[datetime] = None) -> ScanResult:
        now = now or now_local()

        member = self._members.get_by_id(code)
        if not member:
            logger.info("Scan rejected, unknown member code %r", code)
            raise MemberNotFoundError("Member not found. Please register first.")

        def build(day_events: Sequence[AttendanceEvent]) -> AttendanceEvent:
            return AttendanceEvent(
                event_id=generate_event_id(member.member_id, now, {e.event_id for e in day_events}),
                member_id=member.member_id,
                member_name=member.name,
                timestamp=now,
                kind=derive_kind(day_events, member.member_id),
            )

        event = self._attendance.append_for_day(now.date(), build)
        logger.info("Recorded %s for %s (%s)", event.kind.value, member.member_id, member.name)
        return ScanResult(member=member, event=event)

    def today(self, *, now: Optional[datetime] = None) -> TodayView:
        now = now or now_local()
        events = list(self._attendance.list_for_day(now.date()))

        check_ins = sum(1 for e in events if e.kind == AttendanceKind.CHECK_IN)
        check_outs = sum(1 for e in events if e.kind == AttendanceKind.CHECK_OUT)
        recent = list(reversed(events[-self._recent_limit:])) if self._recent_limit > 0 else []

        return TodayView(
            work_date=now.date(),
            stats=TodayStats(check_ins=check_ins, check_outs=check_outs, currently_in=check_ins - check_outs),
            recent=recent,
        )

    def history(
        self,
        *,
        search: Optional[str] = None,
        kind: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> list[AttendanceEvent]:
        """Full history filtered by name/id substring, kind and local date.

        ``kind`` accepts ``"all"`` (or nothing) to keep every kind.
        """

        events: list[AttendanceEvent] = list(self._attendance.list_all())

        term = (search or "").strip().lower()
        if term:
            events = [e for e in events if term in e.member_name.lower() or term in e.member_id.lower()]

        if kind and kind != "all":
            try:
                wanted = AttendanceKind(kind)
            except ValueError:
                raise ValidationError(f"Unknown attendance type: {kind}")
            events = [e for e in events if e.kind == wanted]

        if on_date is not None:
            events = [e for e in events if e.work_date == on_date]

        return events

    @staticmethod
    def history_stats(events: Sequence[AttendanceEvent]) -> HistoryStats:
        return HistoryStats(
            check_ins=sum(1 for e in events if e.kind == AttendanceKind.CHECK_IN),
            check_outs=sum(1 for e in events if e.kind == AttendanceKind.CHECK_OUT),
            unique_members=len({e.member_id for e in events}),
        )
