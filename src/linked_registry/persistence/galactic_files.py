"""Galactic history file format.

    BATTLE:<name>
    DATE:<yyyymmdd>
    FLEET:<name>|<reserved>|<total_ships>|<status text>
    FLEET:...

Status text is scanned for the fixed status keywords. Blank lines are
skipped. A battle whose name and date repeat an earlier block continues
that battle.
"""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING

from ..components.bitstatus import scan_status_text, status_text
from ..core.errors import DuplicateKeyError, FileCorruptedError, InvalidArgumentError
from .textio import UINT16_MAX, UINT32_MAX, parse_uint, read_lines, write_lines

if TYPE_CHECKING:
    from ..galactic import GalaxyHistory

logger = logging.getLogger(__name__)

BATTLE_PREFIX = "BATTLE:"
DATE_PREFIX = "DATE:"
FLEET_PREFIX = "FLEET:"


def load_galactic_history(history: GalaxyHistory, path: str | Path) -> int:
    """Load battle blocks into ``history``.

    Returns:
        Number of FLEET lines read

    Raises:
        DataFileNotFoundError: if the file does not exist (history untouched)
        FileCorruptedError: on any format violation (history left empty)
    """
    path = Path(path)
    config = history.registry.config
    lines = read_lines(path, config.encoding)

    pending_name: str | None = None
    battle = None
    line_no = 0
    count = 0
    try:
        with closing(lines):
            for line_no, raw in lines:
                text = raw.strip()
                if not text:
                    continue

                if text.startswith(BATTLE_PREFIX):
                    if pending_name is not None:
                        raise FileCorruptedError("BATTLE without a DATE line", str(path), line_no)
                    pending_name = text[len(BATTLE_PREFIX):].strip()
                    if not pending_name:
                        raise FileCorruptedError("Empty battle name", str(path), line_no)
                    battle = None

                elif text.startswith(DATE_PREFIX):
                    if pending_name is None:
                        raise FileCorruptedError("DATE without a BATTLE line", str(path), line_no)
                    date = parse_uint(text[len(DATE_PREFIX):].strip(), UINT32_MAX, "date", path, line_no)
                    battle = history.open_battle(pending_name, date)
                    pending_name = None

                elif text.startswith(FLEET_PREFIX):
                    if battle is None:
                        raise FileCorruptedError("FLEET outside a dated BATTLE block", str(path), line_no)
                    parts = text[len(FLEET_PREFIX):].split("|", 3)
                    if len(parts) != 4:
                        raise FileCorruptedError(
                            "Expected 'FLEET:<name>|<reserved>|<total_ships>|<status>'", str(path), line_no
                        )
                    name, reserved, ships_token, status = (part.strip() for part in parts)
                    if not name:
                        raise FileCorruptedError("Empty fleet name", str(path), line_no)
                    if len(name) > config.max_key_length:
                        raise FileCorruptedError(
                            f"Key longer than {config.max_key_length} characters", str(path), line_no
                        )
                    total_ships = parse_uint(ships_token, UINT16_MAX, "total_ships", path, line_no)

                    try:
                        history.report_fleet(battle, name, total_ships, scan_status_text(status), reserved)
                    except (DuplicateKeyError, InvalidArgumentError) as e:
                        raise FileCorruptedError(str(e), str(path), line_no) from e
                    count += 1

                else:
                    raise FileCorruptedError(f"Unrecognised line: {text[:40]!r}", str(path), line_no)

            if pending_name is not None:
                raise FileCorruptedError("BATTLE without a DATE line at end of file", str(path), line_no)
    except Exception as e:
        logger.warning(f"History load from {path} failed, clearing history: {e}")
        history.clear()
        raise

    logger.info(f"Loaded {history.total_battles} battles ({count} fleet reports) from {path}")
    return count


def save_galactic_history(history: GalaxyHistory, path: str | Path) -> int:
    """Write one block per battle. Returns the number of battles written."""
    config = history.registry.config

    def blocks():
        for battle in history.battles():
            yield f"{BATTLE_PREFIX}{battle.key.name}"
            yield f"{DATE_PREFIX}{battle.key.date}"
            for fleet in history.fleets_in(battle):
                yield f"{FLEET_PREFIX}{fleet.key.name}|{fleet.label}|{fleet.size}|{status_text(fleet.flags)}"

    write_lines(path, blocks(), config.encoding, config.fsync_on_save)
    logger.info(f"Saved {history.total_battles} battles to {path}")
    return history.total_battles
