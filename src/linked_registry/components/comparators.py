"""Comparator strategies for ordered collections.

A comparator returns a negative number, zero or a positive number when the
first key sorts before, equal to, or after the second.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..core.types import BattleKey, Comparator, FleetKey, Key


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_exact(a: str, b: str) -> int:
    """Byte-exact ordering, used for content hashes."""
    if a is None or b is None:
        raise InvalidArgumentError("Cannot compare a missing key")
    return _sign(a, b)


def compare_ignore_case(a: str, b: str) -> int:
    """Case-insensitive ordering, used for human names.

    Both sides are lowercased copies; the inputs are left untouched.
    """
    if a is None or b is None:
        raise InvalidArgumentError("Cannot compare a missing key")
    return _sign(a.lower(), b.lower())


def compare_battle_keys(a: BattleKey, b: BattleKey) -> int:
    """Order battles by case-insensitive name, then by date."""
    if a is None or b is None:
        raise InvalidArgumentError("Cannot compare a missing key")
    by_name = compare_ignore_case(a.name, b.name)
    if by_name:
        return by_name
    return _sign(a.date, b.date)


def compare_fleet_keys(a: FleetKey, b: FleetKey) -> int:
    """Order fleet reports by battle, then by case-insensitive fleet name."""
    if a is None or b is None:
        raise InvalidArgumentError("Cannot compare a missing key")
    by_battle = compare_battle_keys(a.battle, b.battle)
    if by_battle:
        return by_battle
    return compare_ignore_case(a.name, b.name)


def sort_key(compare: Comparator) -> Callable[[Key], Any]:
    """Adapt a comparator into a key function for sorted containers."""
    return cmp_to_key(compare)
