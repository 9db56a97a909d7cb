from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from library_attendance.core.enums import AttendanceKind
from library_attendance.core.exceptions import ValidationError


@pytest.fixture
def seeded(container):
    day1 = datetime(2026, 2, 1, 9, 0)
    day2 = datetime(2026, 2, 2, 10, 0)
    ann = container.member_service.register(name="Ann", email="a@x.com", membership_type="student", now=day1)
    bob = container.member_service.register(name="Bob Stone", email="bob@x.com", membership_type="faculty", now=day1)

    svc = container.attendance_service
    svc.scan(ann.member_id, now=day1)
    svc.scan(bob.member_id, now=day1 + timedelta(minutes=1))
    svc.scan(ann.member_id, now=day1 + timedelta(hours=2))
    svc.scan(ann.member_id, now=day2)
    return ann, bob


def test_history_without_filters_returns_everything(container, seeded):
    assert len(container.attendance_service.history()) == 4


def test_history_search_matches_name_or_id_case_insensitive(container, seeded):
    ann, bob = seeded
    svc = container.attendance_service

    assert {e.member_id for e in svc.history(search="stone")} == {bob.member_id}
    assert {e.member_id for e in svc.history(search=ann.member_id.lower())} == {ann.member_id}


def test_history_kind_filter(container, seeded):
    svc = container.attendance_service

    assert len(svc.history(kind="all")) == 4
    assert all(e.kind == AttendanceKind.CHECK_OUT for e in svc.history(kind="check-out"))
    assert len(svc.history(kind="check-in")) == 3


def test_history_rejects_unknown_kind(container, seeded):
    with pytest.raises(ValidationError):
        container.attendance_service.history(kind="lunch-break")


def test_history_date_filter_and_stats(container, seeded):
    svc = container.attendance_service
    events = svc.history(on_date=date(2026, 2, 1))

    stats = svc.history_stats(events)
    assert len(events) == 3
    assert stats.check_ins == 2
    assert stats.check_outs == 1
    assert stats.unique_members == 2


def test_today_view_counts_and_recent_order(container, seeded):
    view = container.attendance_service.today(now=datetime(2026, 2, 1, 18, 0))

    assert view.stats.check_ins == 2
    assert view.stats.check_outs == 1
    assert view.stats.currently_in == 1
    assert [e.timestamp for e in view.recent] == sorted((e.timestamp for e in view.recent), reverse=True)


def test_today_view_is_empty_on_a_quiet_day(container, seeded):
    view = container.attendance_service.today(now=datetime(2026, 3, 1, 12, 0))

    assert view.stats.check_ins == 0
    assert view.recent == []
