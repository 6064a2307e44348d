"""Per-owner reference lists.

A reference names its target record by key and never holds the record itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.errors import AllocationFailureError, DuplicateReferenceError, NotFoundError
from ..core.types import Reference
from .linkedlist import LinkedList

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Comparator, Key


class ReferenceList:
    """Singly linked list of references, kept in attachment order.

    Args:
        compare: Comparator of the record store the references point into
        max_references: Capacity of this list

    Invariants:
        - At most one reference per target key
        - Clearing or detaching never touches the referenced records
    """

    def __init__(self, compare: Comparator, max_references: int | None = None):
        self.compare = compare
        self.max_references = max_references
        self._list: LinkedList[Reference] = LinkedList()

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[Reference]:
        return iter(self._list)

    def __contains__(self, target: Key) -> bool:
        return self._list.search(self._matcher(target)) is not None

    def __repr__(self) -> str:
        return repr(self._list)

    def _matcher(self, target: Key):
        return lambda ref: self.compare(ref.target, target) == 0

    def targets(self) -> list[Key]:
        """Return target keys in attachment order."""
        return [ref.target for ref in self._list]

    def attach(self, target: Key) -> Reference:
        """Append a reference to ``target``."""
        if target in self:
            raise DuplicateReferenceError(f"Already referenced: {target}")
        if self.max_references is not None and len(self._list) >= self.max_references:
            raise AllocationFailureError(f"Reference list is full ({self.max_references} references)")
        ref = Reference(target)
        self._list.append(ref)
        return ref

    def detach(self, target: Key) -> Reference:
        """Remove the reference to ``target`` and return it."""
        node = self._list.delete(self._matcher(target))
        if node is None:
            raise NotFoundError(f"No reference to: {target}")
        return node.get_data()

    def clear(self) -> None:
        """Drop every reference node."""
        self._list.clear()
