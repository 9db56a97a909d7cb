from __future__ import annotations

import os
import time

import pytest

from library_attendance.core.exceptions import StorageLockTimeout
from library_attendance.storage.file_store import FileBlobStore


def test_read_write_delete_roundtrip(tmp_path):
    store = FileBlobStore(tmp_path)

    assert store.read("library_members") is None
    store.write("library_members", "[]")
    store.write("attendance_2026-02-01", "[]")

    assert store.read("library_members") == "[]"
    assert store.keys() == ["attendance_2026-02-01", "library_members"]
    assert store.delete("library_members") is True
    assert store.delete("library_members") is False


def test_rejects_path_like_keys(tmp_path):
    store = FileBlobStore(tmp_path)
    with pytest.raises(ValueError):
        store.write("../escape", "[]")


def test_lock_is_released_after_use(tmp_path):
    store = FileBlobStore(tmp_path)
    with store.lock():
        assert (tmp_path / ".lock").exists()
    assert not (tmp_path / ".lock").exists()


def test_lock_is_reentrant_in_one_thread(tmp_path):
    store = FileBlobStore(tmp_path, lock_timeout=0.1)
    with store.lock():
        with store.lock():
            pass
        assert (tmp_path / ".lock").exists()
    assert not (tmp_path / ".lock").exists()


def test_held_lock_times_out(tmp_path):
    (tmp_path / ".lock").write_text("12345\n")
    store = FileBlobStore(tmp_path, lock_timeout=0.05, lock_stale_after=60)

    with pytest.raises(StorageLockTimeout):
        with store.lock():
            pass


def test_stale_lock_is_broken(tmp_path):
    lock = tmp_path / ".lock"
    lock.write_text("12345\n")
    old = time.time() - 120
    os.utime(lock, (old, old))

    store = FileBlobStore(tmp_path, lock_timeout=0.05, lock_stale_after=30)
    with store.lock():
        store.write("k", "[]")

    assert store.read("k") == "[]"
    assert not lock.exists()


def test_breaking_stale_lock_keeps_a_lock_retaken_meanwhile(tmp_path, monkeypatch):
    from library_attendance.storage import file_store

    lock = tmp_path / ".lock"
    lock.write_text("12345\n")
    old = time.time() - 120
    os.utime(lock, (old, old))

    first = FileBlobStore(tmp_path, lock_timeout=0.2, lock_stale_after=30)
    second = FileBlobStore(tmp_path, lock_timeout=0.2, lock_stale_after=30)

    real_warning = file_store.logger.warning
    interleaved = []

    def warning(msg, *args):
        # `second` has judged the lock stale; `first` breaks and takes it before
        # `second` moves it aside.
        if not interleaved:
            interleaved.append(True)
            first._acquire()
        real_warning(msg, *args)

    monkeypatch.setattr(file_store.logger, "warning", warning)

    with pytest.raises(StorageLockTimeout):
        second._acquire()

    assert lock.read_text().strip() == first._local.token
    assert list(tmp_path.glob(".lock.stale-*")) == []
    first._release()
    assert not lock.exists()


def test_release_leaves_a_lock_held_by_another_writer(tmp_path):
    store = FileBlobStore(tmp_path)
    lock = tmp_path / ".lock"

    with store.lock():
        lock.write_text("99999:other\n")

    assert lock.read_text() == "99999:other\n"
