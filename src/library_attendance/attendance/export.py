from __future__ import annotations

import csv
import io
from typing import Iterable

from ..core.constants import CSV_HEADER, DEFAULT_CSV_DATE_FORMAT, DEFAULT_CSV_TIME_FORMAT
from .model import AttendanceEvent


def write_history_csv(
    events: Iterable[AttendanceEvent],
    *,
    date_format: str = DEFAULT_CSV_DATE_FORMAT,
    time_format: str = DEFAULT_CSV_TIME_FORMAT,
) -> str:
    """Render events as CSV: member id, member name, type, date, time."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for e in events:
        writer.writerow(
            [
                e.member_id,
                e.member_name,
                e.kind.value,
                e.timestamp.strftime(date_format),
                e.timestamp.strftime(time_format),
            ]
        )
    return out.getvalue()
