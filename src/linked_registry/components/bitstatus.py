"""Named status bits packed into integers.

Each flag owns one reserved bit; the name tables are read-only and built
once at import time.
"""

from __future__ import annotations

from enum import Enum, IntFlag, unique
from types import MappingProxyType
from typing import Iterable


@unique
class AssetFlag(IntFlag):
    ENCRYPTED = 1 << 0
    READ_ONLY = 1 << 1
    ARCHIVED = 1 << 2
    CORRUPTED = 1 << 3


@unique
class FleetStatus(IntFlag):
    READY_FOR_JUMP = 1 << 0
    SHIELD_ACTIVE = 1 << 1
    CRITICAL_DAMAGE = 1 << 2
    WITHDRAWAL = 1 << 3


# Keyword substrings recognised in fleet status text, in bit order.
STATUS_KEYWORDS = MappingProxyType({
    "Ready for Jump": FleetStatus.READY_FOR_JUMP,
    "Shield Active": FleetStatus.SHIELD_ACTIVE,
    "Critical Damage": FleetStatus.CRITICAL_DAMAGE,
    "Withdrawal": FleetStatus.WITHDRAWAL,
})


class MaskOp(Enum):
    SET = "set"
    CLEAR = "clear"
    TOGGLE = "toggle"


def decode(flag_type: type[IntFlag], value: int) -> frozenset[str]:
    """Return the names of every member of ``flag_type`` set in ``value``."""
    return frozenset(member.name for member in flag_type if value & member)


def encode(flag_type: type[IntFlag], names: Iterable[str]) -> int:
    """Pack member names of ``flag_type`` into an integer.

    Raises:
        KeyError: if a name is not a member of ``flag_type``
    """
    value = 0
    for name in names:
        value |= flag_type[name]
    return int(value)


def scan_status_text(text: str) -> int:
    """Map every status keyword found in ``text`` to its bit."""
    value = 0
    for keyword, flag in STATUS_KEYWORDS.items():
        if keyword in text:
            value |= flag
    return int(value)


def status_text(value: int) -> str:
    """Inverse of ``scan_status_text`` for the known bits of ``value``."""
    return ", ".join(keyword for keyword, flag in STATUS_KEYWORDS.items() if value & flag)


def apply_mask(value: int, op: MaskOp, mask: int) -> int:
    """Set, clear or toggle the bits of ``mask`` in ``value``."""
    if op is MaskOp.SET:
        return value | mask
    if op is MaskOp.CLEAR:
        return value & ~mask
    if op is MaskOp.TOGGLE:
        return value ^ mask
    raise ValueError(f"Unknown mask operation: {op!r}")


def count_01_pairs(value: int, width: int = 8) -> int:
    """Count set bits whose next higher bit (within ``width``) is clear."""
    pairs = 0
    for i in range(width - 1):
        if value & (1 << i) and not value & (1 << (i + 1)):
            pairs += 1
    return pairs


def count_01_pairs_in_text(text: str, encoding: str = "utf-8") -> int:
    """Sum ``count_01_pairs`` over every byte of ``text``."""
    return sum(count_01_pairs(byte) for byte in text.encode(encoding))
