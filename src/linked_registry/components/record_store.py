"""Primary record store.

Holds the authoritative records in a sorted singly linked list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.errors import (
    AllocationFailureError,
    DuplicateKeyError,
    InvalidArgumentError,
    NotFoundError,
)
from ..core.types import Record
from .linkedlist import LinkedList

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Comparator, Key


def _record_key(record: Record) -> Key:
    return record.key


class RecordStore:
    """Sorted, exclusively owning collection of records.

    Args:
        compare: Comparator used for every ordering and lookup
        max_records: Capacity; inserts beyond it fail

    Invariants:
        - Keys are unique under ``compare``
        - Records are kept in ascending ``compare`` order
    """

    def __init__(self, compare: Comparator, max_records: int | None = None):
        if compare is None:
            raise InvalidArgumentError("A comparator is required")
        self.compare = compare
        self.max_records = max_records
        self._list: LinkedList[Record] = LinkedList()

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._list)

    def __contains__(self, key: Key) -> bool:
        return self._list.search(self._matcher(key)) is not None

    def __repr__(self) -> str:
        return repr(self._list)

    def _matcher(self, key: Key):
        return lambda record: self.compare(record.key, key) == 0

    def keys(self) -> list[Key]:
        """Return record keys in list order."""
        return [record.key for record in self._list]

    def insert(self, key: Key, size: int, flags: int = 0, label: str = "") -> Record:
        """Insert a new record at its sorted position and return it."""
        if not key:
            raise InvalidArgumentError("Record key must not be empty")
        for name, value in (("size", size), ("flags", flags)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidArgumentError(f"Record {name} must be a non-negative integer, got {value!r}")
        if self.max_records is not None and len(self._list) >= self.max_records:
            raise AllocationFailureError(f"Record store is full ({self.max_records} records)")

        record = Record(key=key, size=size, flags=flags, label=label)
        if self._list.insert_sorted(record, _record_key, self.compare) is None:
            raise DuplicateKeyError(f"Duplicate record key: {key}")
        return record

    def find(self, key: Key) -> Record:
        """Return the record whose key compares equal to ``key``."""
        if not key:
            raise InvalidArgumentError("Record key must not be empty")
        found = self._list.search(self._matcher(key))
        if found is None:
            raise NotFoundError(f"Record not found: {key}")
        node, _index = found
        return node.get_data()

    def unlink(self, key: Key) -> Record:
        """Remove the record from the list and return it.

        This does not look at owners; use ``Registry.delete_record`` to
        drop the references to it first.
        """
        node = self._list.delete(self._matcher(key))
        if node is None:
            raise NotFoundError(f"Record not found: {key}")
        return node.get_data()

    def clear(self) -> None:
        """Release every record. Safe on an empty store."""
        self._list.clear()
