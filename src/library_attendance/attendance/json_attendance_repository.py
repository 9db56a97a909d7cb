from __future__ import annotations

from datetime import date
from typing import Any, Dict, Sequence

from ..common.datetime_utils import format_timestamp, parse_timestamp
from ..core.constants import ALL_ATTENDANCE_KEY, DAY_ATTENDANCE_KEY_PREFIX
from ..core.enums import AttendanceKind
from ..storage.blob_store import BlobStore
from ..storage.session import store_session
from .model import AttendanceEvent
from .repository import AttendanceRepository, EventBuilder


def day_key(work_date: date) -> str:
    return f"{DAY_ATTENDANCE_KEY_PREFIX}{work_date.isoformat()}"


def _from_row(r: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=str(r["id"]),
        member_id=str(r["memberId"]),
        member_name=r["memberName"],
        timestamp=parse_timestamp(r["timestamp"]),
        kind=AttendanceKind(r["type"]),
    )


def _to_row(e: AttendanceEvent) -> Dict[str, Any]:
    return {
        "id": e.event_id,
        "memberId": e.member_id,
        "memberName": e.member_name,
        "timestamp": format_timestamp(e.timestamp),
        "type": e.kind.value,
    }


class JsonAttendanceRepository(AttendanceRepository):
    """Full history under ``all_attendance`` plus one snapshot per day."""

    def __init__(self, store: BlobStore, *, strict: bool = False):
        self._store = store
        self._strict = strict

    def list_all(self) -> Sequence[AttendanceEvent]:
        with store_session(self._store, strict=self._strict) as s:
            return s.load_records(ALL_ATTENDANCE_KEY, _from_row)

    def list_for_day(self, work_date: date) -> Sequence[AttendanceEvent]:
        with store_session(self._store, strict=self._strict) as s:
            return s.load_records(day_key(work_date), _from_row)

    def list_for_member(self, member_id: str) -> Sequence[AttendanceEvent]:
        return [e for e in self.list_all() if e.member_id == member_id]

    def append_for_day(self, work_date: date, build: EventBuilder) -> AttendanceEvent:
        key = day_key(work_date)
        with store_session(self._store, strict=self._strict) as s:
            day_events = s.load_records(key, _from_row)
            event = build(day_events)

            day_events.append(event)
            s.save_records(key, day_events, _to_row)

            history = s.load_records(ALL_ATTENDANCE_KEY, _from_row)
            history.append(event)
            s.save_records(ALL_ATTENDANCE_KEY, history, _to_row)
            return event
