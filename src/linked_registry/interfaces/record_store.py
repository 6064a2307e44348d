"""Protocol definition for the primary record store."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from ..core.types import Key, Record


@runtime_checkable
class OrderedRecordStore(Protocol):
    """Sorted collection that owns its records."""

    def insert(self, key: Key, size: int, flags: int = 0, label: str = "") -> Record:
        """Insert at the sorted position; reject equal keys."""
        ...

    def find(self, key: Key) -> Record:
        """Return the record with an equal key or raise NotFoundError."""
        ...

    def unlink(self, key: Key) -> Record:
        """Remove the record from the collection and return it."""
        ...

    def clear(self) -> None:
        """Release every record."""
        ...

    def __iter__(self) -> Iterator[Record]:
        """Records in ascending key order."""
        ...

    def __len__(self) -> int:
        ...

    def __contains__(self, key: Key) -> bool:
        ...
