"""Line-oriented text file helpers shared by the loaders and savers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.errors import DataFileNotFoundError, FileCorruptedError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF


def read_lines(path: str | Path, encoding: str = "utf-8") -> Iterator[tuple[int, str]]:
    """Return an iterator of (1-based line number, line without newline).

    A missing file is reported here, before any line is read. The file is
    closed when the iterator finishes or is closed early.
    """
    path = Path(path)
    if not path.exists():
        raise DataFileNotFoundError(f"Input file not found: {path}")
    return _iter_lines(path, encoding)


def _iter_lines(path: Path, encoding: str) -> Iterator[tuple[int, str]]:
    with open(path, encoding=encoding) as f:
        for line_no, line in enumerate(f, start=1):
            yield line_no, line.rstrip("\r\n")


def strip_comment(line: str, comment_char: str) -> str:
    """Drop everything from ``comment_char`` onward, then surrounding whitespace."""
    if comment_char:
        line = line.split(comment_char, 1)[0]
    return line.strip()


def parse_uint(token: str, maximum: int, field: str, path: str | Path, line_no: int) -> int:
    """Parse a decimal unsigned integer no larger than ``maximum``."""
    if not (token.isascii() and token.isdigit()):
        raise FileCorruptedError(f"{field} is not an unsigned integer: {token!r}", str(path), line_no)
    value = int(token)
    if value > maximum:
        raise FileCorruptedError(f"{field} out of range (max {maximum}): {value}", str(path), line_no)
    return value


def write_lines(path: str | Path, lines: Iterable[str], encoding: str = "utf-8", fsync: bool = True) -> int:
    """Write lines to ``path`` atomically and return how many were written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file
    temp_path = path.with_suffix(path.suffix + ".tmp")
    count = 0
    try:
        with open(temp_path, "w", encoding=encoding, newline="\n") as f:
            for line in lines:
                f.write(line + "\n")
                count += 1
            f.flush()
            if fsync:
                os.fsync(f.fileno())
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    # Atomic rename
    os.replace(temp_path, path)
    logger.debug(f"Wrote {count} lines to {path}")
    return count
