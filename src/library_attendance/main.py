from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_config import configure_logging
from .container import build_container
from .core.constants import (
    DEFAULT_CSV_DATE_FORMAT,
    DEFAULT_CSV_TIME_FORMAT,
    DEFAULT_LOCK_STALE_SECONDS,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_MEMBER_ID_PREFIX,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
)
from .members.controller import register as register_members
from .storage.blob_store import BlobStore

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "STORAGE_DIR",
    "STRICT_STORAGE",
    "LOCK_TIMEOUT_SECONDS",
    "LOCK_STALE_SECONDS",
    "MEMBER_ID_PREFIX",
    "RECENT_ACTIVITY_LIMIT",
    "CSV_DATE_FORMAT",
    "CSV_TIME_FORMAT",
)


def create_app(overrides: Optional[Mapping[str, Any]] = None, *, store: Optional[BlobStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    for name in _SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)
    app.config.setdefault("CSV_DATE_FORMAT", DEFAULT_CSV_DATE_FORMAT)
    app.config.setdefault("CSV_TIME_FORMAT", DEFAULT_CSV_TIME_FORMAT)
    app.config.update(overrides or {})
    app.secret_key = app.config.get("SECRET_KEY")

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger.info("settings=%s storage=%s", settings_module, app.config.get("STORAGE_DIR"))

    storage_config = {
        "directory": app.config.get("STORAGE_DIR", "var/storage"),
        "strict": bool(app.config.get("STRICT_STORAGE", False)),
        "lock_timeout": app.config.get("LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT_SECONDS),
        "lock_stale_after": app.config.get("LOCK_STALE_SECONDS", DEFAULT_LOCK_STALE_SECONDS),
        "member_id_prefix": app.config.get("MEMBER_ID_PREFIX", DEFAULT_MEMBER_ID_PREFIX),
        "recent_limit": app.config.get("RECENT_ACTIVITY_LIMIT", DEFAULT_RECENT_ACTIVITY_LIMIT),
    }
    container = build_container(storage_config=storage_config, store=store)
    app.extensions["library_attendance"] = container

    register_members(app, container)
    register_attendance(app, container)

    return app
