"""Protocol definition for the owner store."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..core.types import Key

if TYPE_CHECKING:
    from ..components.owner_store import Owner


@runtime_checkable
class OrderedOwnerStore(Protocol):
    """Sorted, bidirectional collection of owners and their references."""

    def insert(self, key: Key, owner_id: int) -> Owner:
        """Insert an owner with no references; reject equal keys."""
        ...

    def find(self, key: Key) -> Owner:
        """Return the owner with an equal key or raise NotFoundError."""
        ...

    def delete(self, key: Key) -> Owner:
        """Unlink the owner and drop its references, never its records."""
        ...

    def neighbours(self, key: Key) -> tuple[Owner | None, Owner | None]:
        """Return the owners on either side of ``key``."""
        ...

    def clear(self) -> None:
        """Remove every owner."""
        ...

    def __iter__(self) -> Iterator[Owner]:
        ...

    def __reversed__(self) -> Iterator[Owner]:
        ...

    def __len__(self) -> int:
        ...

    def __contains__(self, key: Key) -> bool:
        ...
