from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_choice, require_non_empty
from ..core.constants import DEFAULT_MEMBER_ID_PREFIX
from ..core.enums import AttendanceKind, MembershipType
from ..core.exceptions import MemberNotFoundError
from .model import Member, MemberAttendanceSummary, MemberStats
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use case: register, browse and remove library members."""

    def __init__(
        self,
        members: MemberRepository,
        attendance: AttendanceRepository,
        *,
        id_prefix: str = DEFAULT_MEMBER_ID_PREFIX,
    ):
        self._members = members
        self._attendance = attendance
        self._id_prefix = id_prefix

    def register(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        membership_type: Optional[str],
        now: Optional[datetime] = None,
    ) -> Member:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        kind = require_choice(membership_type, "Membership type", MembershipType)

        member = self._members.create_member(
            name=name,
            email=email,
            membership_type=kind,
            registered_at=now or now_local(),
            id_prefix=self._id_prefix,
        )
        logger.info("Registered member %s (%s)", member.member_id, member.membership_type.value)
        return member

    def list_members(self, *, search: Optional[str] = None) -> list[Member]:
        members = list(self._members.list_all())
        term = (search or "").strip().lower()
        if not term:
            return members
        return [
            m
            for m in members
            if term in m.name.lower() or term in m.email.lower() or term in m.member_id.lower()
        ]

    def get_member(self, member_id: str) -> Member:
        member = self._members.get_by_id(member_id)
        if not member:
            raise MemberNotFoundError(f"Member {member_id} not found")
        return member

    def delete_member(self, member_id: str) -> None:
        """Hard delete. Recorded attendance for the member is kept as-is."""

        if not self._members.delete_by_id(member_id):
            raise MemberNotFoundError(f"Member {member_id} not found")
        logger.info("Deleted member %s", member_id)

    def stats(self) -> MemberStats:
        members = self._members.list_all()
        by_type = {t.value: 0 for t in MembershipType}
        for m in members:
            by_type[m.membership_type.value] += 1
        return MemberStats(total=len(members), by_type=by_type)

    def attendance_summary(self, member_id: str) -> MemberAttendanceSummary:
        events = self._attendance.list_for_member(member_id)
        return MemberAttendanceSummary(
            check_ins=sum(1 for e in events if e.kind == AttendanceKind.CHECK_IN),
            check_outs=sum(1 for e in events if e.kind == AttendanceKind.CHECK_OUT),
            last_visit=events[-1].timestamp if events else None,
        )
