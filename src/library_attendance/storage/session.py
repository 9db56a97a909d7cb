from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Sequence, TypeVar

from ..core.exceptions import CorruptStorageError
from .blob_store import BlobStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreSession:
    """Unit of work over a locked store.

    Reads see this session's own pending writes. Writes are buffered and only
    reach the store when the enclosing ``store_session`` exits cleanly.
    """

    def __init__(self, store: BlobStore, *, strict: bool = False):
        self._store = store
        self._strict = strict
        self._pending: Dict[str, str] = {}

    def load_list(self, key: str) -> List[Any]:
        text = self._pending[key] if key in self._pending else self._store.read(key)
        if text is None:
            return []

        try:
            data = json.loads(text)
        except ValueError as e:
            return self._corrupt(key, f"invalid JSON ({e})")

        if not isinstance(data, list):
            return self._corrupt(key, "expected a list")
        return data

    def load_records(self, key: str, decode: Callable[[Dict[str, Any]], T]) -> List[T]:
        """Decode every row of a collection.

        A row that cannot be decoded raises ``CorruptStorageError`` in strict
        mode; otherwise it is logged and skipped, and the rest are kept.
        """
        records: List[T] = []
        for index, row in enumerate(self.load_list(key)):
            try:
                if not isinstance(row, dict):
                    raise TypeError(f"expected an object, got {type(row).__name__}")
                records.append(decode(row))
            except (KeyError, TypeError, ValueError) as e:
                reason = f"malformed record at index {index} ({e!r})"
                if self._strict:
                    raise CorruptStorageError(f"Stored collection {key!r} is corrupt: {reason}") from e
                logger.warning("Stored collection %r has a %s; skipping it", key, reason)
        return records

    def save_list(self, key: str, rows: Sequence[Dict[str, Any]]) -> None:
        self._pending[key] = json.dumps(list(rows), ensure_ascii=False)

    def save_records(self, key: str, records: Sequence[T], encode: Callable[[T], Dict[str, Any]]) -> None:
        self.save_list(key, [encode(r) for r in records])

    def flush(self) -> None:
        for key, text in self._pending.items():
            self._store.write(key, text)
        self._pending.clear()

    def _corrupt(self, key: str, reason: str) -> list:
        if self._strict:
            raise CorruptStorageError(f"Stored collection {key!r} is corrupt: {reason}")
        logger.warning("Stored collection %r is corrupt (%s); treating it as empty", key, reason)
        return []


@contextmanager
def store_session(store: BlobStore, *, strict: bool = False) -> Iterator[StoreSession]:
    with store.lock():
        session = StoreSession(store, strict=strict)
        yield session
        session.flush()
