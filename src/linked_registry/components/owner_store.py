"""Ordered owner store.

Uses sortedcontainers.SortedKeyList to keep owners in comparator order
while allowing traversal in both directions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sortedcontainers import SortedKeyList

from ..core.errors import (
    AllocationFailureError,
    DuplicateKeyError,
    EmptyCollectionError,
    InvalidArgumentError,
    NotFoundError,
)
from .comparators import sort_key
from .references import ReferenceList

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Comparator, Key


@dataclass
class Owner:
    """Entity that references zero or more records."""

    key: Key
    id: int
    references: ReferenceList = field(repr=False)


class OwnerStore:
    """Owners in ascending comparator order, each with its own reference list.

    Args:
        compare: Comparator over owner keys
        reference_compare: Comparator of the record store references point into
        max_owners: Capacity of the store
        max_references_per_owner: Capacity of each owner's reference list

    Invariants:
        - Keys are unique under ``compare`` and kept in ascending order
        - Removing an owner clears its references and nothing else
    """

    def __init__(
        self,
        compare: Comparator,
        reference_compare: Comparator,
        max_owners: int | None = None,
        max_references_per_owner: int | None = None,
    ):
        if compare is None or reference_compare is None:
            raise InvalidArgumentError("Both comparators are required")
        self.compare = compare
        self.reference_compare = reference_compare
        self.max_owners = max_owners
        self.max_references_per_owner = max_references_per_owner
        self._sort_key = sort_key(compare)
        self._owners: SortedKeyList = SortedKeyList(key=lambda owner: self._sort_key(owner.key))

    def __len__(self) -> int:
        return len(self._owners)

    def __iter__(self) -> Iterator[Owner]:
        return iter(self._owners)

    def __reversed__(self) -> Iterator[Owner]:
        return reversed(self._owners)

    def __contains__(self, key: Key) -> bool:
        return self._locate(key) is not None

    def keys(self) -> list[Key]:
        """Return owner keys in ascending order."""
        return [owner.key for owner in self._owners]

    def _locate(self, key: Key) -> int | None:
        index = self._owners.bisect_key_left(self._sort_key(key))
        if index < len(self._owners) and self.compare(self._owners[index].key, key) == 0:
            return index
        return None

    def _index(self, key: Key) -> int:
        if not key:
            raise InvalidArgumentError("Owner key must not be empty")
        index = self._locate(key)
        if index is None:
            raise NotFoundError(f"Owner not found: {key}")
        return index

    def insert(self, key: Key, owner_id: int) -> Owner:
        """Insert a new owner with an empty reference list and return it."""
        if not key:
            raise InvalidArgumentError("Owner key must not be empty")
        if not isinstance(owner_id, int) or isinstance(owner_id, bool) or owner_id < 0:
            raise InvalidArgumentError(f"Owner id must be a non-negative integer, got {owner_id!r}")
        if self._locate(key) is not None:
            raise DuplicateKeyError(f"Duplicate owner key: {key}")
        if self.max_owners is not None and len(self._owners) >= self.max_owners:
            raise AllocationFailureError(f"Owner store is full ({self.max_owners} owners)")

        owner = Owner(
            key=key,
            id=owner_id,
            references=ReferenceList(self.reference_compare, self.max_references_per_owner),
        )
        self._owners.add(owner)
        return owner

    def find(self, key: Key) -> Owner:
        """Return the owner whose key compares equal to ``key``."""
        return self._owners[self._index(key)]

    def neighbours(self, key: Key) -> tuple[Owner | None, Owner | None]:
        """Return the owners immediately before and after ``key``."""
        index = self._index(key)
        prev = self._owners[index - 1] if index > 0 else None
        next = self._owners[index + 1] if index + 1 < len(self._owners) else None
        return prev, next

    def first(self) -> Owner:
        if not self._owners:
            raise EmptyCollectionError("Owner store is empty")
        return self._owners[0]

    def last(self) -> Owner:
        if not self._owners:
            raise EmptyCollectionError("Owner store is empty")
        return self._owners[-1]

    def delete(self, key: Key) -> Owner:
        """Unlink the owner, then clear its references, then return it."""
        owner = self._owners.pop(self._index(key))
        owner.references.clear()
        return owner

    def clear(self) -> None:
        """Remove every owner and its references. Safe on an empty store."""
        for owner in self._owners:
            owner.references.clear()
        self._owners.clear()
