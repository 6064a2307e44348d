"""Asset and user file formats.

Asset lines:  <hash> <size_bytes> <flags>
User lines:   <username> <user_id> <hash>*

A ``;`` starts a trailing comment and blank lines are skipped. Loads are
all-or-nothing: any bad line empties the target store and raises.
"""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.errors import (
    DuplicateKeyError,
    FileCorruptedError,
    InvalidArgumentError,
    NotFoundError,
)
from .textio import UINT8_MAX, UINT32_MAX, parse_uint, read_lines, strip_comment, write_lines

if TYPE_CHECKING:
    from ..core.registry import Registry

logger = logging.getLogger(__name__)


def _check_key(key: str, max_length: int, path: Path, line_no: int) -> None:
    if len(key) > max_length:
        raise FileCorruptedError(f"Key longer than {max_length} characters", str(path), line_no)


def load_assets(registry: Registry, path: str | Path) -> int:
    """Load asset lines into the registry's record store.

    Returns:
        Number of assets loaded

    Raises:
        DataFileNotFoundError: if the file does not exist (store untouched)
        FileCorruptedError: on any malformed line (store left empty)
    """
    path = Path(path)
    config = registry.config
    lines = read_lines(path, config.encoding)

    count = 0
    try:
        with closing(lines):
            for line_no, raw in lines:
                text = strip_comment(raw, config.comment_char)
                if not text:
                    continue

                fields = text.split()
                if len(fields) != 3:
                    raise FileCorruptedError(
                        f"Expected '<hash> <size> <flags>', got {len(fields)} field(s)", str(path), line_no
                    )
                key, size_token, flags_token = fields
                _check_key(key, config.max_key_length, path, line_no)
                size = parse_uint(size_token, UINT32_MAX, "size", path, line_no)
                flags = parse_uint(flags_token, UINT8_MAX, "flags", path, line_no)

                try:
                    registry.insert_record(key, size, flags)
                except (DuplicateKeyError, InvalidArgumentError) as e:
                    raise FileCorruptedError(str(e), str(path), line_no) from e
                count += 1
    except Exception as e:
        logger.warning(f"Asset load from {path} failed, clearing records: {e}")
        registry.clear_records()
        raise

    logger.info(f"Loaded {count} assets from {path}")
    return count


def save_assets(registry: Registry, path: str | Path) -> int:
    """Write every asset in list order. Returns the number written."""
    config = registry.config
    lines = (f"{record.key} {record.size} {record.flags}" for record in registry.records)
    count = write_lines(path, lines, config.encoding, config.fsync_on_save)
    logger.info(f"Saved {count} assets to {path}")
    return count


def load_users(registry: Registry, path: str | Path) -> int:
    """Load user lines into the owner store, linking each listed hash.

    Every hash must already be present in the record store, so assets
    must be loaded first.

    Returns:
        Number of users loaded

    Raises:
        DataFileNotFoundError: if the file does not exist (store untouched)
        FileCorruptedError: on a malformed line, a duplicate user, a
            duplicate hash on one line, or a hash with no asset (owner
            store left empty; records untouched)
    """
    path = Path(path)
    config = registry.config
    lines = read_lines(path, config.encoding)

    count = 0
    try:
        with closing(lines):
            for line_no, raw in lines:
                text = strip_comment(raw, config.comment_char)
                if not text:
                    continue

                fields = text.split()
                if len(fields) < 2:
                    raise FileCorruptedError("Expected '<username> <user_id> <hash>*'", str(path), line_no)
                username, id_token, *hashes = fields
                _check_key(username, config.max_key_length, path, line_no)
                user_id = parse_uint(id_token, UINT32_MAX, "user_id", path, line_no)

                try:
                    registry.insert_owner(username, user_id)
                    for asset_hash in hashes:
                        registry.attach(username, asset_hash)
                except (DuplicateKeyError, InvalidArgumentError, NotFoundError) as e:
                    raise FileCorruptedError(str(e), str(path), line_no) from e
                count += 1
    except Exception as e:
        logger.warning(f"User load from {path} failed, clearing users: {e}")
        registry.clear_owners()
        raise

    logger.info(f"Loaded {count} users from {path}")
    return count


def save_users(registry: Registry, path: str | Path) -> int:
    """Write every user in order with its hashes in attachment order."""
    config = registry.config

    def format_owner(owner) -> str:
        return " ".join([str(owner.key), str(owner.id), *map(str, owner.references.targets())])

    count = write_lines(path, (format_owner(o) for o in registry.owners), config.encoding, config.fsync_on_save)
    logger.info(f"Saved {count} users to {path}")
    return count
