"""Backup the attendance store.

Note: the store is a plain directory of JSON files, so a backup is a copy of
that directory taken while holding the store lock.
"""

from __future__ import annotations

import importlib
import shutil
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from library_attendance.storage.file_store import FileBlobStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = FileBlobStore(settings.STORAGE_DIR)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    target = out_dir / f"library_attendance_{ts}"

    with store.lock():
        shutil.copytree(store.directory, target, ignore=shutil.ignore_patterns(".lock", "*.tmp"))

    print(f"OK: Backup created: {target}")


if __name__ == "__main__":
    main()
