from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.json_attendance_repository import JsonAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_LOCK_STALE_SECONDS,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_MEMBER_ID_PREFIX,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
)
from .members.json_member_repository import JsonMemberRepository
from .members.service import MemberService
from .storage.blob_store import BlobStore
from .storage.file_store import FileBlobStore


@dataclass(frozen=True)
class Container:
    store: BlobStore

    members_repo: JsonMemberRepository
    attendance_repo: JsonAttendanceRepository

    member_service: MemberService
    attendance_service: AttendanceService


def build_container(*, storage_config: dict, store: Optional[BlobStore] = None) -> Container:
    """Wire repositories and services.

    ``store`` overrides the file store built from ``storage_config`` (tests
    pass a ``MemoryBlobStore``).
    """

    if store is None:
        store = FileBlobStore(
            storage_config["directory"],
            lock_timeout=float(storage_config.get("lock_timeout", DEFAULT_LOCK_TIMEOUT_SECONDS)),
            lock_stale_after=float(storage_config.get("lock_stale_after", DEFAULT_LOCK_STALE_SECONDS)),
        )
    strict = bool(storage_config.get("strict", False))

    members_repo = JsonMemberRepository(store, strict=strict)
    attendance_repo = JsonAttendanceRepository(store, strict=strict)

    member_service = MemberService(
        members_repo,
        attendance_repo,
        id_prefix=str(storage_config.get("member_id_prefix", DEFAULT_MEMBER_ID_PREFIX)),
    )
    attendance_service = AttendanceService(
        attendance_repo,
        members_repo,
        recent_limit=int(storage_config.get("recent_limit", DEFAULT_RECENT_ACTIVITY_LIMIT)),
    )

    return Container(
        store=store,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        member_service=member_service,
        attendance_service=attendance_service,
    )
