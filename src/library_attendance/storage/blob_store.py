from __future__ import annotations

from typing import ContextManager, Iterable, Optional, Protocol


class BlobStore(Protocol):
    """Name-keyed text blobs (the local-storage contract).

    Note (DIP): repositories depend on this interface, not on a concrete backend.
    """

    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, key: str, text: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def keys(self) -> Iterable[str]:
        raise NotImplementedError

    def lock(self) -> ContextManager[None]:
        """Single-writer lock held around a read-modify-write cycle."""

        raise NotImplementedError
