import csv
import io
from datetime import datetime

from library_attendance.attendance.export import write_history_csv
from library_attendance.attendance.model import AttendanceEvent
from library_attendance.core.enums import AttendanceKind


def _events():
    return [
        AttendanceEvent("LIB1_1", "LIB1", "Ann", datetime(2026, 2, 1, 9, 5, 7), AttendanceKind.CHECK_IN),
        AttendanceEvent("LIB2_2", "LIB2", "Stone, Bob", datetime(2026, 2, 1, 14, 30, 0), AttendanceKind.CHECK_IN),
        AttendanceEvent("LIB1_3", "LIB1", "Ann", datetime(2026, 2, 1, 17, 0, 0), AttendanceKind.CHECK_OUT),
    ]


def test_csv_has_header_plus_one_row_per_event():
    rows = list(csv.reader(io.StringIO(write_history_csv(_events()))))

    assert rows[0] == ["Member ID", "Member Name", "Type", "Date", "Time"]
    assert len(rows) == len(_events()) + 1


def test_csv_column_order_and_formats():
    rows = list(csv.reader(io.StringIO(write_history_csv(_events(), date_format="%Y-%m-%d", time_format="%H:%M:%S"))))

    assert rows[1] == ["LIB1", "Ann", "check-in", "2026-02-01", "09:05:07"]
    assert rows[2][1] == "Stone, Bob"
    assert rows[3][2] == "check-out"


def test_csv_for_empty_history_is_header_only():
    assert write_history_csv([]).splitlines() == ["Member ID,Member Name,Type,Date,Time"]
