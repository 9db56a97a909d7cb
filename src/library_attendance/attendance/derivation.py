from __future__ import annotations

from typing import Iterable

from ..core.enums import AttendanceKind
from .model import AttendanceEvent


def derive_kind(day_events: Iterable[AttendanceEvent], member_id: str) -> AttendanceKind:
    """Decide what a new scan means for ``member_id``.

    ``day_events`` must already be limited to one calendar day. A check-in
    with no matching check-out that day makes the scan a check-out; otherwise
    it is a check-in, so members can cycle in and out any number of times.
    """

    open_check_ins = 0
    for e in day_events:
        if e.member_id != member_id:
            continue
        if e.kind == AttendanceKind.CHECK_IN:
            open_check_ins += 1
        elif open_check_ins:
            open_check_ins -= 1

    return AttendanceKind.CHECK_OUT if open_check_ins else AttendanceKind.CHECK_IN
