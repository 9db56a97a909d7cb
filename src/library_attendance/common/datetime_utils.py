from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def format_timestamp(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp back to a naive local datetime.

    Timestamps written with an offset (e.g. a trailing ``Z``) are converted to
    local time so day boundaries stay local.
    """
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt
