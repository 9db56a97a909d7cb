from __future__ import annotations

from datetime import datetime
from typing import Container

from .datetime_utils import to_epoch_ms


def generate_member_id(registered_at: datetime, taken: Container[str], *, prefix: str) -> str:
    """Member id = prefix + epoch milliseconds, bumped until unused."""
    stamp = to_epoch_ms(registered_at)
    candidate = f"{prefix}{stamp}"
    while candidate in taken:
        stamp += 1
        candidate = f"{prefix}{stamp}"
    return candidate


def generate_event_id(member_id: str, created_at: datetime, taken: Container[str]) -> str:
    stamp = to_epoch_ms(created_at)
    candidate = f"{member_id}_{stamp}"
    while candidate in taken:
        stamp += 1
        candidate = f"{member_id}_{stamp}"
    return candidate
