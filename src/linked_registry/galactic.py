"""Galactic war history.

Fleets are the records and battles are the owners: a battle references the
fleets that fought in it. Each record is one fleet's report in one battle,
keyed by ``FleetKey(battle, name)``, so the same fleet can carry a different
ship count and status in every battle it fought.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .components.bitstatus import MaskOp, apply_mask
from .components.comparators import compare_battle_keys, compare_fleet_keys, compare_ignore_case
from .core.errors import DuplicateReferenceError, InvalidArgumentError, NotFoundError
from .core.registry import Registry
from .core.types import BattleKey, FleetKey

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .components.owner_store import Owner
    from .core.config import RegistryConfig
    from .core.types import Record

logger = logging.getLogger(__name__)


class GalaxyHistory:
    """History of battles and the fleets that fought in them.

    Args:
        config: Capacity limits for the underlying registry

    Invariants:
        - Battles are ordered by name (case-insensitive), then date
        - A battle name and date pair appears at most once; reopening it
          continues the existing battle
        - Every fleet record belongs to exactly one battle, the one named
          in its key
        - Reporting a fleet either inserts and links its record, or
          changes nothing
    """

    def __init__(self, config: RegistryConfig | None = None):
        self.registry = Registry(
            record_compare=compare_fleet_keys,
            owner_compare=compare_battle_keys,
            config=config,
        )

    def __len__(self) -> int:
        return len(self.registry.owners)

    @property
    def total_battles(self) -> int:
        return len(self.registry.owners)

    def battles(self) -> Iterator[Owner]:
        return iter(self.registry.owners)

    def fleets(self) -> Iterator[Record]:
        """Every fleet report, ordered by battle then fleet name."""
        return iter(self.registry.records)

    def open_battle(self, name: str, date: int) -> Owner:
        """Return the battle for (name, date), creating it if needed."""
        if not name or not name.strip():
            raise InvalidArgumentError("Battle name must not be empty")
        key = BattleKey(name, date)
        if key in self.registry.owners:
            logger.debug(f"Continuing battle {key}")
            return self.registry.find_owner(key)
        return self.registry.insert_owner(key, date)

    def find_battle(self, name: str, date: int | None = None) -> Owner:
        """Find a battle by name and date, or the earliest one with ``name``."""
        if date is not None:
            return self.registry.find_owner(BattleKey(name, date))
        for battle in self.registry.owners:
            if compare_ignore_case(battle.key.name, name) == 0:
                return battle
        raise NotFoundError(f"Battle not found: {name}")

    def report_fleet(
        self,
        battle: Owner,
        fleet_name: str,
        total_ships: int,
        status_flags: int,
        reserved: str = "",
    ) -> Record:
        """Record a fleet's state in ``battle`` and link it there.

        The record is inserted and then attached; if attaching fails the
        record is unlinked again before the error propagates.

        Raises:
            InvalidArgumentError: for an empty fleet name or a bad count
            DuplicateReferenceError: if the fleet is already in ``battle``
            AllocationFailureError: if a store or the battle is full
        """
        if not fleet_name or not fleet_name.strip():
            raise InvalidArgumentError("Fleet name must not be empty")
        key = FleetKey(battle.key, fleet_name)
        if key in battle.references:
            raise DuplicateReferenceError(f"Fleet {fleet_name} already reported in {battle.key}")

        fleet = self.registry.insert_record(key, total_ships, status_flags, reserved)
        try:
            self.registry.attach(battle.key, fleet.key)
        except Exception:
            self.registry.records.unlink(fleet.key)
            raise
        return fleet

    def find_fleet(self, battle: Owner, fleet_name: str) -> Record:
        """Return the report of ``fleet_name`` in ``battle``."""
        return self.registry.find_record(FleetKey(battle.key, fleet_name))

    def fleets_in(self, battle: Owner) -> list[Record]:
        """Return the fleets of ``battle`` in the order they were reported."""
        return self.registry.resolve(battle.key)

    def delete_battle(self, name: str, date: int) -> Owner:
        """Delete a battle together with the fleet reports it owns."""
        battle = self.registry.find_owner(BattleKey(name, date))
        for target in battle.references.targets():
            self.registry.delete_record(target)
        return self.registry.delete_owner(battle.key)

    def delete_fleet(self, fleet_name: str, battle: Owner | None = None) -> list[Record]:
        """Delete a fleet's reports, from ``battle`` only or from every battle.

        Raises:
            NotFoundError: if the fleet was never reported there
        """
        if battle is not None:
            return [self.registry.delete_record(FleetKey(battle.key, fleet_name))]

        keys = [fleet.key for fleet in self.registry.records if compare_ignore_case(fleet.key.name, fleet_name) == 0]
        if not keys:
            raise NotFoundError(f"Fleet not found: {fleet_name}")
        return [self.registry.delete_record(key) for key in keys]

    def count_fleets_with_status_bits(self, mask: int) -> int:
        """Count fleet reports, across all battles, sharing a bit with ``mask``."""
        count = 0
        for battle in self.registry.owners:
            for fleet in self.fleets_in(battle):
                if fleet.flags & mask:
                    count += 1
        return count

    def modify_fleet_statuses_in_battle(self, battle_name: str, op: MaskOp, mask: int) -> int:
        """Apply ``op`` with ``mask`` to every fleet of the named battle.

        Returns:
            Number of fleets whose status changed

        Raises:
            NotFoundError: if no battle has that name
        """
        battle = self.find_battle(battle_name)
        modified = 0
        for fleet in self.fleets_in(battle):
            updated = apply_mask(fleet.flags, op, mask)
            if updated != fleet.flags:
                fleet.flags = updated
                modified += 1
        logger.info(f"Applied {op.value} {mask:#x} to {battle.key}: {modified} fleet(s) modified")
        return modified

    def clear(self) -> None:
        self.registry.clear()
