from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import MembershipType
from .model import Member


class MemberRepository(Protocol):
    """Repository interface for the member registry."""

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError

    def get_by_id(self, member_id: str) -> Optional[Member]:
        raise NotImplementedError

    def create_member(
        self,
        *,
        name: str,
        email: str,
        membership_type: MembershipType,
        registered_at: datetime,
        id_prefix: str,
    ) -> Member:
        """Allocate a unique id and append the member in one locked write."""

        raise NotImplementedError

    def delete_by_id(self, member_id: str) -> bool:
        raise NotImplementedError
