"""
Grid parsing utilities for densegrid.

Reads character grids from text: one row per line, one cell per character.
"""

from __future__ import annotations

import io
import logging
from typing import TextIO

from densegrid import Grid
from grid_types import InvalidArgumentError

__all__ = ["read", "parse_grid"]

logger = logging.getLogger(__name__)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def read(stream: TextIO) -> Grid[str]:
    """
    Read a grid of characters from a text stream until end of input.

    Format:
    - Each line is one row, in input order
    - Each character of a line (line terminator excluded) is one cell
    - The last line need not be terminated
    - All lines must have the same length

    Example:
        "AB\\nCD\\n" -> 2x2 grid with rows ["A", "B"], ["C", "D"]

    The stream is consumed but not closed.

    Args:
        stream: Text stream to read from

    Returns:
        Grid of one-character strings

    Raises:
        InvalidArgumentError: If there is no line at all, the lines are
            empty, or the lines do not all have the same length
    """
    row_strings = [_strip_terminator(line) for line in stream]

    if not row_strings:
        raise InvalidArgumentError("Cannot read a grid from empty input: no lines")

    cols = len(row_strings[0])
    if cols == 0:
        raise InvalidArgumentError("Cannot read a grid from empty lines: row 0 has no characters")

    mismatched = [(i, len(row)) for i, row in enumerate(row_strings) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent line lengths\n"
            f"  Expected: {cols} characters (from line 0)\n"
            f"  Mismatched lines:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Line {row_idx}: {actual_cols} characters - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All lines must have the same number of characters"
        raise InvalidArgumentError(error_msg)

    logger.debug("read: %d rows of %d characters", len(row_strings), cols)
    return Grid(list(row) for row in row_strings)


def parse_grid(text: str) -> Grid[str]:
    """
    Parse a grid of characters from a string, with the same rules as `read`.

    Example:
        >>> parse_grid("#.\\n.#").get((1, 1))
        '#'
    """
    return read(io.StringIO(text))
