"""
Interactive viewer for densegrid character grids.
Display a grid with a cursor, move it in eight directions, rotate the grid,
and search for matching cells with keyboard commands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import format_chars, make_color_fn, render_boxed
from densegrid import Grid, move
from grid_parser import parse_grid, read
from grid_types import Direction, InvalidArgumentError, NotFoundError, Position

SAMPLES = dict(
    maze = "\n".join([
        "#########",
        "#..#....#",
        "#..#.##.#",
        "#....#..#",
        "####.#.##",
        "#....#..#",
        "#########",
    ]),
    life = "\n".join([
        "..........",
        "...#......",
        "....#.....",
        "..###.....",
        "..........",
        "......##..",
        "......##..",
    ]),
    letters = "ABCD\nEFGH\nIJKL",
)

KEY_BINDINGS: dict[str, Direction | str] = {
    "w": Direction.N,
    "q": Direction.NW,
    "a": Direction.W,
    "z": Direction.SW,
    "s": Direction.S,
    "c": Direction.SE,
    "d": Direction.E,
    "e": Direction.NE,
    "[": "rotate_left",
    "]": "rotate_right",
    "f": "find_next",
    "r": "reset",
    "x": "quit",
}


@dataclass
class ViewerState:
    """Grid, cursor and status line of the viewer.

    All key handling goes through the methods here so it can run without a
    terminal.
    """

    grid: Grid[str]
    cursor: Position = (0, 0)
    status_message: str = "Ready"
    original: Grid[str] = field(init=False)

    def __post_init__(self) -> None:
        self.original = self.grid.copy()

    @property
    def current(self) -> str:
        return self.grid.get(self.cursor)

    def step(self, direction: Direction) -> None:
        """Move the cursor one cell, refusing to leave the grid."""
        target = move(direction, self.cursor)
        if not self.grid.inside(target):
            self.status_message = f"✗ Cannot move {direction.name}: edge of grid"
            return
        self.cursor = target
        self.status_message = f"✓ Moved {direction.name}"

    def rotate_left(self) -> None:
        """Rotate the grid 90° counter-clockwise, carrying the cursor along."""
        i, j = self.cursor
        self.cursor = (self.grid.width - 1 - j, i)
        self.grid = self.grid.rotate_left()
        self.status_message = "✓ Rotated left"

    def rotate_right(self) -> None:
        """Rotate the grid 90° clockwise, carrying the cursor along."""
        i, j = self.cursor
        self.cursor = (j, self.grid.height - 1 - i)
        self.grid = self.grid.rotate_right()
        self.status_message = "✓ Rotated right"

    def find_next(self) -> None:
        """Jump to the next cell, row-major and wrapping, holding the current value."""
        wanted = self.current
        width = self.grid.width
        start = self.cursor[0] * width + self.cursor[1]

        def index(p: Position) -> int:
            return p[0] * width + p[1]

        try:
            self.cursor = self.grid.find(lambda p, v: index(p) > start and v == wanted)
        except NotFoundError:
            try:
                self.cursor = self.grid.find(lambda p, v: index(p) < start and v == wanted)
            except NotFoundError:
                self.status_message = f"✗ No other '{wanted}' in grid"
                return
        self.status_message = f"✓ Found '{wanted}' at {self.cursor}"

    def neighborhood(self) -> str:
        """Values of the eight neighbors in Direction order; blank past the edge."""
        seen = self.grid.fold8(lambda q, v, acc: {**acc, q: v}, self.cursor, {})
        return "".join(
            seen.get(move(direction, self.cursor), " ") for direction in Direction
        )

    def reset(self) -> None:
        self.grid = self.original.copy()
        self.cursor = (0, 0)
        self.status_message = "Grid reset to original state"

    def handle_key(self, key: str) -> bool:
        """Apply a key press. Returns False when the viewer should quit."""
        action = KEY_BINDINGS.get(key.lower())
        if action is None:
            self.status_message = f"Unknown key: {repr(key)}"
        elif isinstance(action, Direction):
            self.step(action)
        elif action == "quit":
            self.status_message = "Quitting..."
            return False
        else:
            getattr(self, action)()
        return True


class InteractiveDemo:
    """Interactive viewer for a character grid."""

    def __init__(self, grid: Grid[str]) -> None:
        self.state = ViewerState(grid)
        self.console = Console()

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        state = self.state
        neighbors = [q for q, _ in state.grid.neighbors8(state.cursor)]
        color_fn = make_color_fn(v for _, v in state.grid.items())
        lines = render_boxed(
            state.grid,
            f"{state.grid.height}x{state.grid.width}",
            highlight_pos=state.cursor,
            color_fn=color_fn,
            neighbors=neighbors,
        )

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"{state.cursor}  value {state.current!r}\n")
        status.append("Neighbors (N NW W SW S SE E NE): ", style="bold")
        status.append(f"[{state.neighborhood()}]\n\n")

        # Convert ANSI-colored grid text to Rich Text properly
        status.append(Text.from_ansi("\n".join(lines)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  Q W E / A D / Z S C - Move cursor\n")
        status.append("  [ ] - Rotate left / right\n")
        status.append("  F - Find next cell with the same value\n")
        status.append("  R - Reset to original grid\n")
        status.append("  X - Quit\n\n")

        # Status line at the bottom
        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(state.status_message)

        return Panel(status, title="densegrid Viewer", border_style="green", width=80)

    def run(self) -> None:
        """Run the viewer until the quit key is pressed."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    key = readchar.readkey()
                    if not self.state.handle_key(key):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.state.status_message = "Interrupted by user"
                live.update(self.generate_display())


def load_grid(source: str) -> Grid[str]:
    """Load a grid from a sample name or a file path."""
    if source in SAMPLES:
        return parse_grid(SAMPLES[source])
    with open(source, encoding="utf-8") as stream:
        return read(stream)


def main(argv: list[str]) -> int:
    args = argv[1:]
    from_ide = bool(args) and args[0] == "sublime"
    if from_ide:
        args = args[1:]
    source = args[0] if args else "maze"

    try:
        grid = load_grid(source)
    except (OSError, InvalidArgumentError) as e:
        print(f"ERROR: cannot load grid from {source!r}:\n{e}")
        return 1

    if from_ide:
        # Running from IDE - just render the initial state
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
        print('Running from IDE - rendering initial state')
        print()
        print(format_chars(grid), end="")
        return 0

    InteractiveDemo(grid).run()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
