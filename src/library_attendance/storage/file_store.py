from __future__ import annotations

import logging
import os
import re
import tempfile
import threading
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..core.constants import DEFAULT_LOCK_STALE_SECONDS, DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import StorageLockTimeout

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_LOCK_NAME = ".lock"


class FileBlobStore:
    """One JSON file per key inside a directory.

    Writes go through a temp file + ``os.replace`` so a reader never sees a
    half-written blob. ``lock()`` is a lock key: a ``.lock`` file created with
    ``O_EXCL``. It is re-entrant within one thread.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
        lock_stale_after: float = DEFAULT_LOCK_STALE_SECONDS,
        poll_interval: float = 0.02,
    ):
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._lock_path = self._dir / _LOCK_NAME
        self._lock_timeout = float(lock_timeout)
        self._lock_stale_after = float(lock_stale_after)
        self._poll_interval = float(poll_interval)
        self._local = threading.local()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, key: str, text: str) -> None:
        target = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.remove(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def delete(self, key: str) -> bool:
        try:
            self._path(key).unlink()
            return True
        except FileNotFoundError:
            return False

    def keys(self) -> List[str]:
        return sorted(p.stem for p in self._dir.glob("*.json") if not p.name.startswith("."))

    @contextmanager
    def lock(self) -> Iterator[None]:
        depth = getattr(self._local, "depth", 0)
        if depth:
            self._local.depth = depth + 1
            try:
                yield
            finally:
                self._local.depth -= 1
            return

        self._acquire()
        self._local.depth = 1
        try:
            yield
        finally:
            self._local.depth = 0
            self._release()

    def _acquire(self) -> None:
        deadline = time.monotonic() + self._lock_timeout
        token = f"{os.getpid()}:{uuid.uuid4().hex}"
        while True:
            try:
                fd = os.open(self._lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            except FileExistsError:
                if self._break_if_stale():
                    continue
                if time.monotonic() >= deadline:
                    raise StorageLockTimeout(f"Could not lock {self._dir} within {self._lock_timeout:.1f}s")
                time.sleep(self._poll_interval)
                continue

            try:
                os.write(fd, f"{token}\n".encode("ascii"))
            finally:
                os.close(fd)
            self._local.token = token
            return

    def _release(self) -> None:
        token = getattr(self._local, "token", None)
        self._local.token = None
        try:
            held = self._lock_path.read_text(encoding="ascii").strip()
        except FileNotFoundError:
            logger.warning("Lock %s was already removed", self._lock_path)
            return

        if held != token:
            # Broken as stale and re-taken by another writer; not ours to remove.
            logger.warning("Lock %s is now held by another writer", self._lock_path)
            return
        self._lock_path.unlink()

    def _lock_identity(self, path: Path) -> Tuple[int, int, str]:
        st = path.stat()
        return st.st_ino, st.st_mtime_ns, path.read_text(encoding="ascii", errors="replace")

    def _break_if_stale(self) -> bool:
        """Remove an abandoned lock. Returns True when the caller should retry.

        The lock is moved aside with an atomic rename and compared with what
        was judged stale, so a fresh lock taken in between is never dropped.
        """
        try:
            seen = self._lock_identity(self._lock_path)
            age = time.time() - seen[1] / 1e9
        except FileNotFoundError:
            return True

        if age < self._lock_stale_after:
            return False

        logger.warning("Breaking stale lock %s (age %.1fs)", self._lock_path, age)
        aside = self._dir / f"{_LOCK_NAME}.stale-{uuid.uuid4().hex}"
        try:
            os.rename(self._lock_path, aside)
        except FileNotFoundError:
            return True

        try:
            if self._lock_identity(aside) == seen:
                return True
            # Another writer replaced the stale lock first: put theirs back.
            logger.warning("Lock %s was re-taken while breaking it, restoring", self._lock_path)
            try:
                os.link(aside, self._lock_path)
            except FileExistsError:
                logger.error("Could not restore lock %s, a third writer holds it", self._lock_path)
            return False
        finally:
            aside.unlink()
