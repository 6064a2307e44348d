"""Common type definitions for the linked registry.

Defines the value types shared by every store.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import NamedTuple

# Core primitive types
Key = Hashable
Comparator = Callable[[Key, Key], int]


@dataclass
class Record:
    """Authoritative entity held by the primary record store.

    ``size`` is a byte size for assets and a ship count for fleets.
    ``label`` carries the fleet reserved column and stays empty for assets.
    """

    key: Key
    size: int
    flags: int = 0
    label: str = ""


@dataclass(frozen=True)
class Reference:
    """Non-owning link to a record, by its key."""

    target: Key


class BattleKey(NamedTuple):
    """Owner key of a battle: name plus YYYYMMDD date."""

    name: str
    date: int

    def __str__(self) -> str:
        return f"{self.name} ({self.date})"


class FleetKey(NamedTuple):
    """Record key of a fleet as reported in one battle."""

    battle: BattleKey
    name: str

    def __str__(self) -> str:
        return f"{self.name} @ {self.battle}"
