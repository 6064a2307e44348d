"""Linked registry - ordered records with non-owning cross-references."""

from .core.config import RegistryConfig, load_config
from .core.errors import (
    RegistryError,
    InvalidArgumentError,
    AllocationFailureError,
    NotFoundError,
    DuplicateKeyError,
    DuplicateReferenceError,
    FileCorruptedError,
    DataFileNotFoundError,
    EmptyCollectionError,
)
from .core.registry import Registry
from .core.types import Key, Comparator, Record, Reference, BattleKey, FleetKey
from .components.comparators import compare_exact, compare_ignore_case, compare_battle_keys, compare_fleet_keys
from .components.bitstatus import AssetFlag, FleetStatus, MaskOp
from .galactic import GalaxyHistory

__all__ = [
    "RegistryConfig",
    "load_config",
    "RegistryError",
    "InvalidArgumentError",
    "AllocationFailureError",
    "NotFoundError",
    "DuplicateKeyError",
    "DuplicateReferenceError",
    "FileCorruptedError",
    "DataFileNotFoundError",
    "EmptyCollectionError",
    "Registry",
    "Key",
    "Comparator",
    "Record",
    "Reference",
    "BattleKey",
    "FleetKey",
    "compare_exact",
    "compare_ignore_case",
    "compare_battle_keys",
    "compare_fleet_keys",
    "AssetFlag",
    "FleetStatus",
    "MaskOp",
    "GalaxyHistory",
]
