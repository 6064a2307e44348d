"""Registry implementation - main public API.

Orchestrates the primary record store, the owner store and the
references between them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..components.comparators import compare_ignore_case, compare_exact
from ..components.owner_store import Owner, OwnerStore
from ..components.record_store import RecordStore
from .config import RegistryConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Comparator, Key, Record, Reference
    from ..interfaces.owner_store import OrderedOwnerStore
    from ..interfaces.record_store import OrderedRecordStore

logger = logging.getLogger(__name__)


class Registry:
    """Records, owners, and the non-owning references between them.

    Args:
        record_compare: Comparator over record keys
        owner_compare: Comparator over owner keys
        config: Capacity limits; defaults to ``RegistryConfig()``

    Public API:
        - insert_record / find_record / delete_record / clear_records
        - insert_owner / find_owner / delete_owner / clear_owners
        - attach / detach / resolve / referrers

    Invariants:
        - Every reference names a record present in the record store
        - A record is only unlinked after every reference to it is detached
        - Removing owners never removes records
    """

    def __init__(
        self,
        record_compare: Comparator = compare_exact,
        owner_compare: Comparator = compare_ignore_case,
        config: RegistryConfig | None = None,
    ):
        self.config = config or RegistryConfig()
        self.records: OrderedRecordStore = RecordStore(record_compare, max_records=self.config.max_records)
        self.owners: OrderedOwnerStore = OwnerStore(
            owner_compare,
            reference_compare=record_compare,
            max_owners=self.config.max_owners,
            max_references_per_owner=self.config.max_references_per_owner,
        )

    def __repr__(self) -> str:
        return f"Registry(records={len(self.records)}, owners={len(self.owners)})"

    # Records

    def insert_record(self, key: Key, size: int, flags: int = 0, label: str = "") -> Record:
        """Insert a record at its sorted position."""
        record = self.records.insert(key, size, flags, label)
        logger.debug(f"Inserted record {key}")
        return record

    def find_record(self, key: Key) -> Record:
        return self.records.find(key)

    def delete_record(self, key: Key) -> Record:
        """Delete a record together with every reference to it.

        The record is located first, so a missing key changes nothing.
        Detaching cannot fail once the record and its referrers are known,
        and the record is unlinked last.
        """
        record = self.records.find(key)
        referrers = self.referrers(record.key)

        for owner in referrers:
            owner.references.detach(record.key)
        self.records.unlink(record.key)

        logger.info(f"Deleted record {record.key} and {len(referrers)} reference(s) to it")
        return record

    def clear_records(self) -> None:
        """Remove every record. References go first, owners stay."""
        for owner in self.owners:
            owner.references.clear()
        self.records.clear()

    # Owners

    def insert_owner(self, key: Key, owner_id: int) -> Owner:
        owner = self.owners.insert(key, owner_id)
        logger.debug(f"Inserted owner {key}")
        return owner

    def find_owner(self, key: Key) -> Owner:
        return self.owners.find(key)

    def delete_owner(self, key: Key) -> Owner:
        """Delete an owner and its references; its records are untouched."""
        owner = self.owners.delete(key)
        logger.info(f"Deleted owner {owner.key}")
        return owner

    def clear_owners(self) -> None:
        self.owners.clear()

    # References

    def attach(self, owner_key: Key, record_key: Key) -> Reference:
        """Make an owner reference an existing record.

        The reference stores the record's canonical key as held by the
        record store.
        """
        owner = self.owners.find(owner_key)
        record = self.records.find(record_key)
        return owner.references.attach(record.key)

    def detach(self, owner_key: Key, record_key: Key) -> Reference:
        """Remove an owner's reference to a record."""
        owner = self.owners.find(owner_key)
        return owner.references.detach(record_key)

    def resolve(self, owner_key: Key) -> list[Record]:
        """Return the records an owner references, in attachment order."""
        owner = self.owners.find(owner_key)
        return [self.records.find(ref.target) for ref in owner.references]

    def referrers(self, record_key: Key) -> list[Owner]:
        """Return every owner holding a reference to ``record_key``."""
        return [owner for owner in self.owners if record_key in owner.references]

    def dangling_references(self) -> Iterator[tuple[Key, Key]]:
        """Yield (owner key, target key) for references with no record."""
        for owner in self.owners:
            for ref in owner.references:
                if ref.target not in self.records:
                    yield owner.key, ref.target

    def clear(self) -> None:
        """Remove all owners, then all records."""
        self.owners.clear()
        self.records.clear()
