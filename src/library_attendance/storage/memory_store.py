from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional


class MemoryBlobStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, text: str) -> None:
        self._blobs[key] = text

    def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None

    def keys(self) -> List[str]:
        return sorted(self._blobs)

    @contextmanager
    def lock(self) -> Iterator[None]:
        with self._lock:
            yield
