from __future__ import annotations

from datetime import datetime

import pytest

from library_attendance.container import build_container
from library_attendance.main import create_app
from library_attendance.storage.memory_store import MemoryBlobStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 9, 15, 0)


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def container(store):
    return build_container(storage_config={}, store=store)


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"STORAGE_DIR": str(tmp_path / "storage")})


@pytest.fixture
def client(app):
    return app.test_client()
