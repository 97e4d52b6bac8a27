"""
ASCII rendering for densegrid grids.

Provides two rendering approaches:
1. Hook-based printing to a text sink (print_grid / print_chars) - row-major
   cell emission with caller-controlled line and separator hooks
2. Terminal rendering - character grids as colored strings, optionally boxed
   and laid out side by side
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TextIO

import simple_chalk as chalk  # type: ignore[import-untyped]

from densegrid import Grid
from grid_types import CellPrinter, LineHook, Position, SepHook, T

__all__ = [
    "PrintOptions",
    "print_grid",
    "print_chars",
    "format_grid",
    "format_chars",
    "make_color_fn",
    "render_chars",
    "render_boxed",
    "render_grids_flow",
    "strip_ansi",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Hook-Based Printing
# =============================================================================


def _no_line_hook(sink: TextIO, row: int) -> None:
    pass


def _newline(sink: TextIO, row: int) -> None:
    sink.write("\n")


def _no_sep(sink: TextIO, pos: Position) -> None:
    pass


@dataclass(frozen=True)
class PrintOptions:
    """Hooks governing print_grid output.

    bol is called at the beginning of each row with the row index, eol at
    the end of each row with the row index, and sep between two consecutive
    cells of a row with the position of the left one.
    """

    bol: LineHook = _no_line_hook
    eol: LineHook = _newline
    sep: SepHook = _no_sep


DEFAULT_OPTIONS = PrintOptions()


def print_grid(
    cell_printer: CellPrinter[T],
    sink: TextIO,
    grid: Grid[T],
    options: PrintOptions = DEFAULT_OPTIONS,
) -> None:
    """
    Print a grid row-major on a text sink.

    Args:
        cell_printer: Called as cell_printer(sink, position, value) for each cell
        sink: Anything with a write(str) method
        grid: The grid to print
        options: Line and separator hooks (default: newline after each row)
    """
    last_col = grid.width - 1
    for i, row in enumerate(grid):
        options.bol(sink, i)
        for j, value in enumerate(row):
            cell_printer(sink, (i, j), value)
            if j < last_col:
                options.sep(sink, (i, j))
        options.eol(sink, i)


def _print_char(sink: TextIO, pos: Position, value: Any) -> None:
    sink.write(str(value))


def print_chars(sink: TextIO, grid: Grid[str], options: PrintOptions = DEFAULT_OPTIONS) -> None:
    """Print a grid of characters, writing each cell as is."""
    print_grid(_print_char, sink, grid, options)


def format_grid(
    cell_printer: CellPrinter[T],
    grid: Grid[T],
    options: PrintOptions = DEFAULT_OPTIONS,
) -> str:
    """Like print_grid, but return the output as a string."""
    buffer = io.StringIO()
    print_grid(cell_printer, buffer, grid, options)
    return buffer.getvalue()


def format_chars(grid: Grid[str], options: PrintOptions = DEFAULT_OPTIONS) -> str:
    """Like print_chars, but return the output as a string."""
    return format_grid(_print_char, grid, options)


# =============================================================================
# Terminal Rendering
# =============================================================================

Colorizer = Callable[[str], str]

PALETTE: tuple[Colorizer, ...] = (
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
)

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove ANSI color codes, leaving the visible characters."""
    return _ANSI_RE.sub("", text)


def _plain(s: str) -> str:
    return s


def make_color_fn(values: Iterable[Any]) -> Callable[[Any], Colorizer]:
    """
    Assign palette colors to the distinct values, in sorted string order.

    Values not seen here are left uncolored.
    """
    distinct = sorted({str(v) for v in values})
    colors: dict[str, Colorizer] = {v: PALETTE[i % len(PALETTE)] for i, v in enumerate(distinct)}

    def color_fn(value: Any) -> Colorizer:
        return colors.get(str(value), _plain)

    return color_fn


def _render_cell(
    value: Any,
    pos: Position,
    cell_width: int,
    highlight_pos: Position | None,
    neighbors: frozenset[Position],
    color_fn: Callable[[Any], Colorizer] | None,
) -> str:
    char = str(value)[:1] or "?"
    content = char if cell_width == 1 else char.center(cell_width)

    if pos == highlight_pos:
        return chalk.bgWhite.black(content)
    if pos in neighbors:
        return chalk.bgBlue(content)
    if color_fn is not None:
        return color_fn(value)(content)
    return content


def render_chars(
    grid: Grid[Any],
    highlight_pos: Position | None = None,
    color_fn: Callable[[Any], Colorizer] | None = None,
    cell_width: int = 1,
    neighbors: Iterable[Position] = (),
) -> list[str]:
    """
    Render a grid as one string per row, one character per cell.

    Args:
        grid: The grid to render (each cell shown by the first character of str(value))
        highlight_pos: Optional position shown black on white
        color_fn: Optional function returning a colorizer for a cell value
        cell_width: Characters per cell (default 1); the character is centered
        neighbors: Positions shown on a blue background

    Returns:
        List of strings representing the rendered rows
    """
    tinted = frozenset(neighbors)
    return [
        "".join(
            _render_cell(value, (i, j), cell_width, highlight_pos, tinted, color_fn)
            for j, value in enumerate(row)
        )
        for i, row in enumerate(grid)
    ]


def render_boxed(
    grid: Grid[Any],
    title: str = "",
    cell_width: int = 1,
    highlight_pos: Position | None = None,
    color_fn: Callable[[Any], Colorizer] | None = None,
    neighbors: Iterable[Position] = (),
) -> list[str]:
    """
    Render a grid inside a box-drawn frame with its title centered in the top border.

    Returns:
        List of strings representing the rendered grid lines
    """
    border_width = 2  # left and right borders
    grid_width = grid.width * cell_width + border_width
    label = f" {title} " if title else ""

    title_line = "┌" + "─" * (grid_width - 2) + "┐"
    # Center title in the border
    if label and len(label) <= grid_width - 2:
        title_start = (grid_width - len(label)) // 2
        title_line = (
            "┌" +
            "─" * (title_start - 1) +
            label +
            "─" * (grid_width - title_start - len(label) - 1) +
            "┐"
        )

    lines = [title_line]
    for row_text in render_chars(grid, highlight_pos, color_fn, cell_width, neighbors):
        lines.append("│" + row_text + "│")
    lines.append("└" + "─" * (grid_width - 2) + "┘")
    return lines


def render_grids_flow(
    grids: dict[str, Grid[Any]],
    terminal_width: int = 120,
    cell_width: int = 1,
    color_fn: Callable[[Any], Colorizer] | None = None,
) -> str:
    """
    Render several titled grids in flow layout (multiple grids per row).

    Args:
        grids: Grids keyed by title, rendered in insertion order
        terminal_width: Maximum width for layout (default 120)
        cell_width: Characters per cell (default 1)
        color_fn: Optional function returning a colorizer for a cell value

    Returns:
        Rendered string with all grids in flow layout
    """
    rendered: dict[str, list[str]] = {}
    widths: dict[str, int] = {}
    for title, grid in grids.items():
        rendered[title] = render_boxed(grid, title, cell_width, color_fn=color_fn)
        widths[title] = grid.width * cell_width + 2  # +2 for borders

    output_lines: list[str] = []
    grid_spacing = 2  # spaces between grids

    current_row: list[str] = []
    current_width = 0

    for title in rendered:
        needed_width = widths[title]
        if current_row:
            needed_width += grid_spacing

        if current_row and current_width + needed_width > terminal_width:
            _flush_grid_row(current_row, rendered, widths, output_lines, grid_spacing)
            current_row = []
            current_width = 0

        current_row.append(title)
        current_width += needed_width

    if current_row:
        _flush_grid_row(current_row, rendered, widths, output_lines, grid_spacing)

    logger.debug("render_grids_flow: %d grids, %d lines", len(grids), len(output_lines))
    return "\n".join(output_lines)


def _flush_grid_row(
    row_titles: list[str],
    rendered: dict[str, list[str]],
    widths: dict[str, int],
    output_lines: list[str],
    grid_spacing: int,
) -> None:
    """Helper to flush a row of grids to output_lines."""
    max_height = max(len(rendered[title]) for title in row_titles)

    for line_idx in range(max_height):
        line_parts = []
        for title in row_titles:
            lines = rendered[title]
            if line_idx < len(lines):
                line_parts.append(lines[line_idx])
            else:
                line_parts.append(" " * widths[title])
        output_lines.append((" " * grid_spacing).join(line_parts))

    # Add spacing between rows
    output_lines.append("")
