"""Configuration for the linked registry.

Defines the tunable limits and file-format settings shared by the stores
and the persistence layer.
"""

from __future__ import annotations

import tomllib  # Python 3.11+
from dataclasses import dataclass, fields
from pathlib import Path

from .errors import DataFileNotFoundError, InvalidArgumentError


@dataclass
class RegistryConfig:
    """Configuration parameters for a registry and its data files.

    Attributes:
        max_records: Capacity of the primary record store
        max_owners: Capacity of the owner store
        max_references_per_owner: Capacity of a single owner's reference list
        max_key_length: Longest accepted record or owner key
        comment_char: Starts a trailing comment in asset and user files
        encoding: Text encoding of every data file
        fsync_on_save: Whether to fsync the temp file before replacing
    """

    max_records: int = 1_000_000
    max_owners: int = 100_000
    max_references_per_owner: int = 10_000
    max_key_length: int = 256
    comment_char: str = ";"
    encoding: str = "utf-8"
    fsync_on_save: bool = True


def load_config(path: Path) -> RegistryConfig:
    """Build a RegistryConfig from a TOML file.

    Keys may sit at the top level or under a ``[registry]`` table.
    """
    path = Path(path)
    if not path.exists():
        raise DataFileNotFoundError(f"Config file not found: {path}")
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    data = data.get("registry", data)

    known = {f.name for f in fields(RegistryConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidArgumentError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return RegistryConfig(**data)
