"""
Shared type definitions for the densegrid system.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, TextIO, TypeVar

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")

# (row, col), both 0-based. Not necessarily inside any particular grid.
Position = tuple[int, int]


class Direction(Enum):
    """The eight ways to move on a grid, starting north and turning through west.

    Declaration order is the neighbor order used by iter8/fold8.
    """

    N = (-1, 0)  # Up (decreasing row)
    NW = (-1, -1)
    W = (0, -1)  # Left (decreasing col)
    SW = (1, -1)
    S = (1, 0)  # Down (increasing row)
    SE = (1, 1)
    E = (0, 1)  # Right (increasing col)
    NE = (-1, 1)

    @property
    def delta(self) -> Position:
        return self.value


CARDINALS: tuple[Direction, ...] = (Direction.N, Direction.W, Direction.S, Direction.E)


# =============================================================================
# Errors
# =============================================================================


class InvalidArgumentError(ValueError):
    """Bad dimensions, an out-of-bounds position, or malformed grid text."""


class NotFoundError(LookupError):
    """No position satisfies a search predicate."""


# =============================================================================
# Callback Types
# =============================================================================

CellFactory = Callable[[Position], T]
Visitor = Callable[[Position, T], None]
Folder = Callable[[Position, T, A], A]
Predicate = Callable[[Position, T], bool]
Mapper = Callable[[Position, T], U]

CellPrinter = Callable[[TextIO, Position, T], None]
LineHook = Callable[[TextIO, int], None]
SepHook = Callable[[TextIO, Position], None]
