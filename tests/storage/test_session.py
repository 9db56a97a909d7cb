from __future__ import annotations

import json

import pytest

from library_attendance.container import build_container
from library_attendance.core.constants import MEMBERS_KEY
from library_attendance.core.exceptions import CorruptStorageError
from library_attendance.storage.memory_store import MemoryBlobStore
from library_attendance.storage.session import store_session


def test_missing_blob_is_empty():
    with store_session(MemoryBlobStore()) as s:
        assert s.load_list("nothing_here") == []


def test_writes_are_flushed_on_clean_exit():
    store = MemoryBlobStore()
    with store_session(store) as s:
        s.save_list("k", [{"a": 1}])
        assert s.load_list("k") == [{"a": 1}]
        assert store.read("k") is None

    assert json.loads(store.read("k")) == [{"a": 1}]


def test_writes_are_discarded_on_error():
    store = MemoryBlobStore({"k": "[]"})
    with pytest.raises(RuntimeError):
        with store_session(store) as s:
            s.save_list("k", [{"a": 1}])
            raise RuntimeError("boom")

    assert store.read("k") == "[]"


@pytest.mark.parametrize("blob", ["{not json", '{"id": "LIB1"}', "[1, 2]", '[{"id": "LIB1"}]'])
def test_corrupt_members_blob_reads_as_empty_by_default(blob):
    container = build_container(storage_config={}, store=MemoryBlobStore({MEMBERS_KEY: blob}))

    assert container.member_service.list_members() == []


@pytest.mark.parametrize("blob", ["{not json", '[{"id": "LIB1"}]'])
def test_corrupt_members_blob_raises_in_strict_mode(blob):
    container = build_container(storage_config={"strict": True}, store=MemoryBlobStore({MEMBERS_KEY: blob}))

    with pytest.raises(CorruptStorageError):
        container.member_service.list_members()


def test_register_over_corrupt_blob_resets_it(fixed_now):
    store = MemoryBlobStore({MEMBERS_KEY: "garbage"})
    container = build_container(storage_config={}, store=store)

    ann = container.member_service.register(name="Ann", email="a@x.com", membership_type="student", now=fixed_now)

    rows = json.loads(store.read(MEMBERS_KEY))
    assert [r["id"] for r in rows] == [ann.member_id]
    assert rows[0]["membershipType"] == "student"


def _member_row(i):
    return {
        "id": f"LIB{1700000000000 + i}",
        "name": f"Member {i}",
        "email": f"m{i}@x.com",
        "membershipType": "student",
        "registrationDate": "2026-01-15T10:00:00.000",
    }


def test_one_bad_row_does_not_discard_the_registry(fixed_now):
    rows = [_member_row(i) for i in range(50)]
    rows.append({**_member_row(50), "membershipType": "gold"})
    store = MemoryBlobStore({MEMBERS_KEY: json.dumps(rows)})
    container = build_container(storage_config={}, store=store)

    assert len(container.member_service.list_members()) == 50

    container.member_service.register(name="Ann", email="a@x.com", membership_type="student", now=fixed_now)

    assert len(json.loads(store.read(MEMBERS_KEY))) == 51
    assert len(container.member_service.list_members()) == 51


def test_one_bad_row_raises_in_strict_mode():
    rows = [_member_row(1), {**_member_row(2), "membershipType": "gold"}]
    container = build_container(storage_config={"strict": True}, store=MemoryBlobStore({MEMBERS_KEY: json.dumps(rows)}))

    with pytest.raises(CorruptStorageError):
        container.member_service.list_members()
