from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import format_timestamp, parse_timestamp
from ..common.ids import generate_member_id
from ..core.constants import MEMBERS_KEY
from ..core.enums import MembershipType
from ..storage.blob_store import BlobStore
from ..storage.session import store_session
from .model import Member
from .repository import MemberRepository


def _from_row(r: Dict[str, Any]) -> Member:
    return Member(
        member_id=str(r["id"]),
        name=r["name"],
        email=r["email"],
        membership_type=MembershipType(r["membershipType"]),
        registered_at=parse_timestamp(r["registrationDate"]),
    )


def _to_row(m: Member) -> Dict[str, Any]:
    return {
        "id": m.member_id,
        "name": m.name,
        "email": m.email,
        "membershipType": m.membership_type.value,
        "registrationDate": format_timestamp(m.registered_at),
    }


class JsonMemberRepository(MemberRepository):
    def __init__(self, store: BlobStore, *, strict: bool = False):
        self._store = store
        self._strict = strict

    def list_all(self) -> Sequence[Member]:
        with store_session(self._store, strict=self._strict) as s:
            return s.load_records(MEMBERS_KEY, _from_row)

    def get_by_id(self, member_id: str) -> Optional[Member]:
        return next((m for m in self.list_all() if m.member_id == member_id), None)

    def create_member(
        self,
        *,
        name: str,
        email: str,
        membership_type: MembershipType,
        registered_at: datetime,
        id_prefix: str,
    ) -> Member:
        with store_session(self._store, strict=self._strict) as s:
            members = s.load_records(MEMBERS_KEY, _from_row)
            member_id = generate_member_id(
                registered_at,
                {m.member_id for m in members},
                prefix=id_prefix,
            )
            member = Member(
                member_id=member_id,
                name=name,
                email=email,
                membership_type=membership_type,
                registered_at=registered_at,
            )
            members.append(member)
            s.save_records(MEMBERS_KEY, members, _to_row)
            return member

    def delete_by_id(self, member_id: str) -> bool:
        with store_session(self._store, strict=self._strict) as s:
            members = s.load_records(MEMBERS_KEY, _from_row)
            remaining = [m for m in members if m.member_id != member_id]
            if len(remaining) == len(members):
                return False
            s.save_records(MEMBERS_KEY, remaining, _to_row)
            return True
