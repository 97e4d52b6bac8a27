"""
Dense two-dimensional grids with a uniform coordinate convention.

Grids are rows first: `height` is the number of rows, `width` the number of
columns, and a position is `(row, col)`, both 0-based.

             0   1       j      width-1
           +---+---+---+---+---+--+
        0  |   |   |   |   |   |  |
           +---+---+---+---+---+--+
        i  |   |   |   | X |   |  |
           +---+---+---+---+---+--+
  height-1 |   |   |   |   |   |  |
           +---+---+---+---+---+--+
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator

from grid_types import (
    A,
    CARDINALS,
    CellFactory,
    Direction,
    Folder,
    InvalidArgumentError,
    Mapper,
    NotFoundError,
    Position,
    Predicate,
    T,
    U,
    Visitor,
)

__all__ = [
    "Grid",
    "move",
    "north",
    "north_west",
    "west",
    "south_west",
    "south",
    "south_east",
    "east",
    "north_east",
]


# =============================================================================
# Topology
# =============================================================================


def move(direction: Direction, pos: Position) -> Position:
    """Offset a position by one step. The result may lie outside any grid."""
    i, j = pos
    di, dj = direction.value
    return (i + di, j + dj)


def north(pos: Position) -> Position:
    """The position above."""
    return move(Direction.N, pos)


def north_west(pos: Position) -> Position:
    """The position above left."""
    return move(Direction.NW, pos)


def west(pos: Position) -> Position:
    """The position to the left."""
    return move(Direction.W, pos)


def south_west(pos: Position) -> Position:
    """The position below left."""
    return move(Direction.SW, pos)


def south(pos: Position) -> Position:
    """The position below."""
    return move(Direction.S, pos)


def south_east(pos: Position) -> Position:
    """The position below right."""
    return move(Direction.SE, pos)


def east(pos: Position) -> Position:
    """The position to the right."""
    return move(Direction.E, pos)


def north_east(pos: Position) -> Position:
    """The position above right."""
    return move(Direction.NE, pos)


def _check_dimensions(height: int, width: int, caller: str) -> None:
    if height < 1 or width < 1:
        raise InvalidArgumentError(
            f"Invalid grid dimensions in {caller}: {height}x{width}\n"
            f"  Height and width must both be at least 1"
        )


# =============================================================================
# Grid
# =============================================================================


class Grid(Generic[T]):
    """
    A dense, rectangular, mutable 2D grid.

    The grid owns its row storage. `set` mutates in place and is visible to
    every holder of the same instance; `copy`, `map` and the rotations return
    fresh grids.

    Examples:
        >>> g = Grid.init(2, 3, lambda p: p[0] * 3 + p[1])
        >>> g.size
        (2, 3)
        >>> g.get((1, 2))
        5
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: Iterable[Iterable[T]]) -> None:
        """
        Create a grid from row iterables. The rows are copied.

        Raises:
            InvalidArgumentError: If there are no rows, the first row is
                empty, or the rows do not all have the same length
        """
        data = [list(row) for row in rows]
        if not data or not data[0]:
            raise InvalidArgumentError("Grid must have at least one row and one column")

        width = len(data[0])
        mismatched = [(i, len(row)) for i, row in enumerate(data) if len(row) != width]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths\n"
                f"  Expected: {width} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual in mismatched:
                error_msg += f"    Row {row_idx}: {actual} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise InvalidArgumentError(error_msg)

        self._rows: list[list[T]] = data

    @classmethod
    def _wrap(cls, data: list[list[T]]) -> Grid[T]:
        # Takes ownership of already-validated rows.
        grid: Grid[T] = cls.__new__(cls)
        grid._rows = data
        return grid

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[T]]) -> Grid[T]:
        """Same as `Grid(rows)`."""
        return cls(rows)

    @classmethod
    def make(cls, height: int, width: int, value: T) -> Grid[T]:
        """
        Create a grid where every cell is `value`.

        Every cell holds the very same object, so a mutable `value` is
        shared by all cells.

        Raises:
            InvalidArgumentError: If height < 1 or width < 1
        """
        _check_dimensions(height, width, "make")
        return cls._wrap([[value] * width for _ in range(height)])

    @classmethod
    def init(cls, height: int, width: int, f: CellFactory[T]) -> Grid[T]:
        """
        Create a grid where the cell at position p holds f(p).

        f is called exactly once per position.

        Raises:
            InvalidArgumentError: If height < 1 or width < 1
        """
        _check_dimensions(height, width, "init")
        return cls._wrap([[f((i, j)) for j in range(width)] for i in range(height)])

    def copy(self) -> Grid[T]:
        """A new grid with the same cells and its own row storage."""
        return Grid._wrap([row[:] for row in self._rows])

    __copy__ = copy

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self._rows)

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self._rows[0])

    @property
    def size(self) -> tuple[int, int]:
        """Height and width, in that order."""
        return (len(self._rows), len(self._rows[0]))

    def inside(self, pos: Position) -> bool:
        """Whether pos is a legal position in this grid."""
        i, j = pos
        return 0 <= i < len(self._rows) and 0 <= j < len(self._rows[0])

    def _check_inside(self, pos: Position, caller: str) -> None:
        if not self.inside(pos):
            raise InvalidArgumentError(
                f"Position {pos} out of bounds in {caller}\n"
                f"  Grid size: {self.height}x{self.width}\n"
                f"  Valid rows: [0, {self.height}), valid columns: [0, {self.width})"
            )

    def get(self, pos: Position) -> T:
        """
        Get the value at pos.

        Raises:
            InvalidArgumentError: If pos is out of bounds
        """
        self._check_inside(pos, "get")
        i, j = pos
        return self._rows[i][j]

    def set(self, pos: Position, value: T) -> None:
        """
        Overwrite the value at pos, in place.

        Raises:
            InvalidArgumentError: If pos is out of bounds
        """
        self._check_inside(pos, "set")
        i, j = pos
        self._rows[i][j] = value

    def __getitem__(self, pos: Position) -> T:
        return self.get(pos)

    def __setitem__(self, pos: Position, value: T) -> None:
        self.set(pos, value)

    def __contains__(self, pos: object) -> bool:
        if not isinstance(pos, tuple) or len(pos) != 2 or not all(isinstance(c, int) for c in pos):
            return False
        return self.inside(pos)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[T, ...]]:
        for row in self._rows:
            yield tuple(row)

    def rows(self) -> tuple[tuple[T, ...], ...]:
        """Snapshot of the rows, top to bottom."""
        return tuple(tuple(row) for row in self._rows)

    # -------------------------------------------------------------------------
    # Neighbors
    #
    # All neighbor functions start north of p and go N, NW, W, SW, S, SE, E, NE, skipping
    # positions outside the grid.
    # -------------------------------------------------------------------------

    def neighbors4(self, pos: Position) -> Iterator[tuple[Position, T]]:
        """Yield (q, value) for the in-bounds cardinal neighbors: N, W, S, E."""
        for direction in CARDINALS:
            q = move(direction, pos)
            if self.inside(q):
                yield q, self._rows[q[0]][q[1]]

    def neighbors8(self, pos: Position) -> Iterator[tuple[Position, T]]:
        """Yield (q, value) for the in-bounds neighbors: N, NW, W, SW, S, SE, E, NE."""
        for direction in Direction:
            q = move(direction, pos)
            if self.inside(q):
                yield q, self._rows[q[0]][q[1]]

    def iter4(self, f: Visitor[T], pos: Position) -> None:
        """Apply f to the four neighbors of pos (provided they exist)."""
        for q, value in self.neighbors4(pos):
            f(q, value)

    def iter8(self, f: Visitor[T], pos: Position) -> None:
        """Apply f to the eight neighbors of pos (provided they exist)."""
        for q, value in self.neighbors8(pos):
            f(q, value)

    def fold4(self, f: Folder[T, A], pos: Position, acc: A) -> A:
        """Fold f over the four neighbors of pos (provided they exist)."""
        for q, value in self.neighbors4(pos):
            acc = f(q, value, acc)
        return acc

    def fold8(self, f: Folder[T, A], pos: Position, acc: A) -> A:
        """Fold f over the eight neighbors of pos (provided they exist)."""
        for q, value in self.neighbors8(pos):
            acc = f(q, value, acc)
        return acc

    # -------------------------------------------------------------------------
    # Whole-grid traversal, row-major: top left first, left to right in each
    # row, rows top to bottom.
    # -------------------------------------------------------------------------

    def positions(self) -> Iterator[Position]:
        """
        Iterate over all positions in row-major order.

        Examples:
            >>> list(Grid([[1, 2], [3, 4]]).positions())
            [(0, 0), (0, 1), (1, 0), (1, 1)]
        """
        for i in range(len(self._rows)):
            for j in range(len(self._rows[0])):
                yield (i, j)

    def items(self) -> Iterator[tuple[Position, T]]:
        """Iterate over (position, value) pairs in row-major order."""
        for i, row in enumerate(self._rows):
            for j, value in enumerate(row):
                yield (i, j), value

    def iter(self, f: Visitor[T]) -> None:
        """Apply f at each position of the grid."""
        for pos, value in self.items():
            f(pos, value)

    def fold(self, f: Folder[T, A], acc: A) -> A:
        """Fold f over each position of the grid."""
        for pos, value in self.items():
            acc = f(pos, value, acc)
        return acc

    def find(self, f: Predicate[T]) -> Position:
        """
        Return the first position, in row-major order, where f holds.

        f is not called past the first match.

        Raises:
            NotFoundError: If f holds nowhere
        """
        for pos, value in self.items():
            if f(pos, value):
                return pos
        raise NotFoundError(f"No position in the {self.height}x{self.width} grid satisfies the predicate")

    def map(self, f: Mapper[T, U]) -> Grid[U]:
        """A fresh grid of the same size holding f(p, get(p)) at each p."""
        return Grid._wrap(
            [[f((i, j), value) for j, value in enumerate(row)] for i, row in enumerate(self._rows)]
        )

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def rotate_left(self) -> Grid[T]:
        """Rotate 90° counter-clockwise: new[i][j] = old[j][W-1-i]. Result is W×H."""
        h, w = self.size
        data = self._rows
        return Grid._wrap([[data[j][w - 1 - i] for j in range(h)] for i in range(w)])

    def rotate_right(self) -> Grid[T]:
        """Rotate 90° clockwise: new[i][j] = old[H-1-j][i]. Result is W×H."""
        h, w = self.size
        data = self._rows
        return Grid._wrap([[data[h - 1 - j][i] for j in range(h)] for i in range(w)])

    def __repr__(self) -> str:
        return f"Grid({self._rows!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows
