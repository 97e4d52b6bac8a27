"""
Comprehensive test suite for the densegrid Grid.
"""

import copy

import pytest

from densegrid import (
    Grid,
    east,
    move,
    north,
    north_east,
    north_west,
    south,
    south_east,
    south_west,
    west,
)
from grid_types import Direction, InvalidArgumentError, NotFoundError


# =============================================================================
# Test Construction
# =============================================================================


class TestConstruction:
    """Tests for make, init, from_rows and copy."""

    @pytest.mark.parametrize("h,w", [(1, 1), (3, 7), (7, 3)])
    def test_make_dimensions(self, h: int, w: int) -> None:
        """make has the requested size and every cell equals the fill value."""
        g = Grid.make(h, w, "x")
        assert g.height == h
        assert g.width == w
        assert g.size == (h, w)
        assert all(g.get(p) == "x" for p in g.positions())

    @pytest.mark.parametrize("h,w", [(0, 5), (5, 0), (-1, 3), (0, 0)])
    def test_make_rejects_bad_dimensions(self, h: int, w: int) -> None:
        """make needs at least one row and one column."""
        with pytest.raises(InvalidArgumentError, match="Invalid grid dimensions in make"):
            Grid.make(h, w, 0)

    def test_make_shares_fill_value(self) -> None:
        """A mutable fill value is the same object in every cell."""
        fill: list[int] = []
        g = Grid.make(2, 2, fill)
        g.get((0, 0)).append(1)
        assert g.get((1, 1)) == [1]
        assert g.get((1, 1)) is fill

    def test_make_rows_are_distinct(self) -> None:
        """Setting one cell of a made grid leaves the other rows alone."""
        g = Grid.make(3, 2, 0)
        g.set((0, 0), 9)
        assert g.get((1, 0)) == 0
        assert g.get((2, 0)) == 0

    def test_init_values(self) -> None:
        """init stores f(p) at each position."""
        g = Grid.init(4, 6, lambda p: p[0] * 10 + p[1])
        for i in range(4):
            for j in range(6):
                assert g.get((i, j)) == i * 10 + j

    def test_init_calls_f_once_per_position(self) -> None:
        """init covers every position exactly once."""
        calls: list[tuple[int, int]] = []

        def f(p: tuple[int, int]) -> int:
            calls.append(p)
            return 0

        Grid.init(3, 4, f)
        assert sorted(calls) == [(i, j) for i in range(3) for j in range(4)]

    @pytest.mark.parametrize("h,w", [(0, 1), (1, 0), (-2, -2)])
    def test_init_rejects_bad_dimensions(self, h: int, w: int) -> None:
        """init fails like make on bad dimensions."""
        with pytest.raises(InvalidArgumentError, match="Invalid grid dimensions in init"):
            Grid.init(h, w, lambda p: 0)

    def test_invalid_argument_is_value_error(self) -> None:
        """Callers can catch the builtin ValueError."""
        with pytest.raises(ValueError):
            Grid.make(0, 1, 0)

    def test_from_rows_copies(self) -> None:
        """Rows given to the constructor are copied, not aliased."""
        rows = [[1, 2], [3, 4]]
        g = Grid.from_rows(rows)
        rows[0][0] = 99
        assert g.get((0, 0)) == 1

    def test_from_rows_accepts_iterables(self) -> None:
        """Any iterable of iterables makes a grid."""
        g = Grid(range(i, i + 3) for i in range(2))
        assert g.rows() == ((0, 1, 2), (1, 2, 3))

    def test_empty_rows_rejected(self) -> None:
        """No rows, or empty rows, are rejected."""
        with pytest.raises(InvalidArgumentError, match="at least one row"):
            Grid([])
        with pytest.raises(InvalidArgumentError, match="at least one row"):
            Grid([[]])

    def test_ragged_rows_rejected(self) -> None:
        """Rows of different lengths are rejected."""
        with pytest.raises(InvalidArgumentError, match="Inconsistent row lengths"):
            Grid([[1, 2], [3]])

    def test_copy_independence(self) -> None:
        """Setting a cell of a copy leaves the original unchanged."""
        g = Grid.init(3, 3, lambda p: p[0] + p[1])
        g2 = g.copy()
        assert g2 == g
        assert g2 is not g

        g2.set((1, 1), 42)
        assert g.get((1, 1)) == 2
        assert g2.get((1, 1)) == 42

    def test_copy_module(self) -> None:
        """copy.copy produces an independent grid too."""
        g = Grid.make(2, 2, ".")
        g2 = copy.copy(g)
        g2[(0, 0)] = "#"
        assert g[(0, 0)] == "."


# =============================================================================
# Test Access
# =============================================================================


class TestAccess:
    """Tests for get, set and inside."""

    def test_set_get_round_trip(self) -> None:
        """Values can be set and retrieved."""
        g = Grid.make(3, 3, 0)
        for i in range(3):
            for j in range(3):
                g.set((i, j), i * 3 + j)
        for i in range(3):
            for j in range(3):
                assert g.get((i, j)) == i * 3 + j

    def test_set_is_shared(self) -> None:
        """set mutates in place, visible through every reference."""
        g = Grid.make(2, 2, 0)
        alias = g
        g.set((1, 0), 5)
        assert alias.get((1, 0)) == 5

    def test_set_returns_none(self) -> None:
        """set has no result."""
        g = Grid.make(1, 1, 0)
        assert g.set((0, 0), 1) is None

    @pytest.mark.parametrize("pos", [(2, 0), (-1, 0), (0, 3), (0, -1), (5, 5)])
    def test_out_of_bounds(self, pos: tuple[int, int]) -> None:
        """get and set raise out of bounds; inside says False."""
        g = Grid.make(2, 3, 0)
        assert g.inside(pos) is False
        assert pos not in g
        with pytest.raises(InvalidArgumentError, match="out of bounds in get"):
            g.get(pos)
        with pytest.raises(InvalidArgumentError, match="out of bounds in set"):
            g.set(pos, 1)

    def test_negative_index_is_not_wrapped(self) -> None:
        """Python-style negative indexing is not allowed."""
        g = Grid([[1, 2], [3, 4]])
        with pytest.raises(InvalidArgumentError):
            g[(-1, -1)]

    def test_inside_corners(self) -> None:
        """All four corners are inside."""
        g = Grid.make(4, 5, 0)
        for pos in [(0, 0), (0, 4), (3, 0), (3, 4)]:
            assert g.inside(pos)
            assert pos in g

    def test_contains_non_position(self) -> None:
        """Membership of something that is not a position is False."""
        g = Grid.make(2, 2, 0)
        assert "a" not in g
        assert (0, 0, 0) not in g

    def test_len_and_iter_rows(self) -> None:
        """len is the height and iterating yields rows."""
        g = Grid([["a", "b"], ["c", "d"], ["e", "f"]])
        assert len(g) == 3
        assert list(g) == [("a", "b"), ("c", "d"), ("e", "f")]

    def test_equality(self) -> None:
        """Grids compare by content."""
        assert Grid([[1, 2]]) == Grid([[1, 2]])
        assert Grid([[1, 2]]) != Grid([[2, 1]])
        assert Grid([[1, 2]]) != Grid([[1], [2]])
        assert Grid([[1]]) != [[1]]

    def test_unhashable(self) -> None:
        """Mutable grids cannot be dict keys."""
        with pytest.raises(TypeError):
            hash(Grid([[1]]))

    def test_repr(self) -> None:
        assert repr(Grid([[1, 2]])) == "Grid([[1, 2]])"


# =============================================================================
# Test Topology
# =============================================================================


class TestMove:
    """Tests for position arithmetic."""

    def test_direction_deltas(self) -> None:
        """Each direction moves by its fixed offset."""
        expected = {
            Direction.N: (-1, 0),
            Direction.NW: (-1, -1),
            Direction.W: (0, -1),
            Direction.SW: (1, -1),
            Direction.S: (1, 0),
            Direction.SE: (1, 1),
            Direction.E: (0, 1),
            Direction.NE: (-1, 1),
        }
        for direction, delta in expected.items():
            assert direction.delta == delta
            assert move(direction, (5, 5)) == (5 + delta[0], 5 + delta[1])

    def test_direction_order(self) -> None:
        """Iterating Direction goes N, NW, W, SW, S, SE, E, NE."""
        assert [d.name for d in Direction] == ["N", "NW", "W", "SW", "S", "SE", "E", "NE"]

    def test_named_moves(self) -> None:
        """Named helpers match move."""
        p = (3, 3)
        assert north(p) == (2, 3)
        assert north_west(p) == (2, 2)
        assert west(p) == (3, 2)
        assert south_west(p) == (4, 2)
        assert south(p) == (4, 3)
        assert south_east(p) == (4, 4)
        assert east(p) == (3, 4)
        assert north_east(p) == (2, 4)

    def test_move_can_leave_grid(self) -> None:
        """move is total and may produce negative coordinates."""
        assert move(Direction.NW, (0, 0)) == (-1, -1)


class TestNeighbors:
    """Tests for iter4, iter8, fold4 and fold8."""

    def setup_method(self) -> None:
        self.g = Grid.init(3, 3, lambda p: p[0] * 3 + p[1])

    def test_iter4_interior_order(self) -> None:
        """iter4 visits N, W, S, E."""
        seen: list[tuple[tuple[int, int], int]] = []
        self.g.iter4(lambda q, x: seen.append((q, x)), (1, 1))
        assert seen == [((0, 1), 1), ((1, 0), 3), ((2, 1), 7), ((1, 2), 5)]

    def test_iter8_interior_order(self) -> None:
        """iter8 visits N, NW, W, SW, S, SE, E, NE."""
        seen: list[tuple[int, int]] = []
        self.g.iter8(lambda q, x: seen.append(q), (1, 1))
        assert seen == [(0, 1), (0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2)]

    def test_iter4_corner_skips_outside(self) -> None:
        """Neighbors outside the grid are skipped."""
        seen: list[tuple[int, int]] = []
        self.g.iter4(lambda q, x: seen.append(q), (0, 0))
        assert seen == [(1, 0), (0, 1)]

    def test_iter8_corner_skips_outside(self) -> None:
        """Bottom-right corner has three neighbors, still in Direction order."""
        seen: list[tuple[int, int]] = []
        self.g.iter8(lambda q, x: seen.append(q), (2, 2))
        assert seen == [(1, 2), (1, 1), (2, 1)]

    def test_iter8_single_cell(self) -> None:
        """A 1x1 grid has no neighbors."""
        seen: list[tuple[int, int]] = []
        Grid.make(1, 1, 0).iter8(lambda q, x: seen.append(q), (0, 0))
        assert seen == []

    def test_iter_outside_position(self) -> None:
        """A position outside the grid can still have neighbors inside."""
        seen: list[tuple[int, int]] = []
        self.g.iter8(lambda q, x: seen.append(q), (-1, -1))
        assert seen == [(0, 0)]

    def test_fold4_sum(self) -> None:
        """fold4 threads the accumulator through the cardinal neighbors."""
        assert self.g.fold4(lambda q, x, acc: acc + x, (1, 1), 0) == 1 + 3 + 7 + 5

    def test_fold8_order(self) -> None:
        """fold8 accumulates left to right in Direction order."""
        result = self.g.fold8(lambda q, x, acc: acc + [x], (1, 1), [])
        assert result == [1, 0, 3, 6, 7, 8, 5, 2]

    def test_fold8_edge_leaves_acc_unchanged(self) -> None:
        """Out-of-bounds neighbors leave the accumulator as is."""
        calls = []

        def f(q, x, acc):
            calls.append(q)
            return acc + 1

        assert self.g.fold8(f, (0, 1), 0) == 5
        assert calls == [(0, 0), (1, 0), (1, 1), (1, 2), (0, 2)]

    def test_neighbors_generators(self) -> None:
        """neighbors4/neighbors8 yield the same sequence as iter4/iter8."""
        assert [q for q, _ in self.g.neighbors4((0, 2))] == [(0, 1), (1, 2)]
        assert dict(self.g.neighbors8((1, 1)))[(0, 0)] == 0


# =============================================================================
# Test Traversal
# =============================================================================


class TestTraversal:
    """Tests for iter, fold, find and map."""

    def test_fold_sum(self) -> None:
        """Sum of i+j over a 5x5 grid is 100."""
        g = Grid.init(5, 5, lambda p: p[0] + p[1])
        assert g.fold(lambda p, x, s: x + s, 0) == 100

    def test_iter_row_major(self) -> None:
        """iter goes left to right within a row, rows top to bottom."""
        g = Grid([["a", "b", "c"], ["d", "e", "f"]])
        seen: list[str] = []
        g.iter(lambda p, x: seen.append(x))
        assert "".join(seen) == "abcdef"

    def test_fold_row_major(self) -> None:
        """fold visits positions in the same order as iter."""
        g = Grid.make(2, 3, 0)
        order = g.fold(lambda p, x, acc: acc + [p], [])
        assert order == list(g.positions())
        assert order == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_items(self) -> None:
        g = Grid([[1, 2], [3, 4]])
        assert list(g.items()) == [((0, 0), 1), ((0, 1), 2), ((1, 0), 3), ((1, 1), 4)]

    def test_find_first_match(self) -> None:
        """find returns the row-major first match."""
        g = Grid([[0, 1, 0], [1, 0, 1]])
        assert g.find(lambda p, x: x == 1) == (0, 1)
        assert g.find(lambda p, x: x == 1 and p[0] == 1) == (1, 0)

    def test_find_not_found(self) -> None:
        """find raises NotFoundError when nothing matches."""
        g = Grid.make(3, 3, 0)
        with pytest.raises(NotFoundError):
            g.find(lambda p, x: False)

    def test_not_found_is_lookup_error(self) -> None:
        """Callers can catch the builtin LookupError."""
        with pytest.raises(LookupError):
            Grid.make(1, 1, 0).find(lambda p, x: x == 1)

    def test_find_short_circuits(self) -> None:
        """The predicate is not called after the first success."""
        g = Grid.init(3, 3, lambda p: p)
        calls: list[tuple[int, int]] = []

        def pred(p, x):
            calls.append(p)
            return p == (1, 0)

        assert g.find(pred) == (1, 0)
        assert calls == [(0, 0), (0, 1), (0, 2), (1, 0)]

    def test_map(self) -> None:
        """map returns a new grid of f(p, x), same size."""
        g = Grid([[1, 2], [3, 4]])
        m = g.map(lambda p, x: f"{p[0]}{p[1]}:{x}")
        assert m.size == g.size
        assert m.rows() == (("00:1", "01:2"), ("10:3", "11:4"))
        assert g.get((0, 0)) == 1

    def test_map_is_fresh(self) -> None:
        """Mutating the result of map leaves the source alone."""
        g = Grid.make(2, 2, 0)
        m = g.map(lambda p, x: x)
        m.set((0, 0), 1)
        assert g.get((0, 0)) == 0


# =============================================================================
# Test Rotations
# =============================================================================


class TestRotate:
    """Tests for rotate_left and rotate_right."""

    def setup_method(self) -> None:
        # 2x3
        self.g = Grid([["a", "b", "c"], ["d", "e", "f"]])

    def test_rotate_left(self) -> None:
        """The east column becomes the top row."""
        r = self.g.rotate_left()
        assert r.size == (3, 2)
        assert r.rows() == (("c", "f"), ("b", "e"), ("a", "d"))

    def test_rotate_right(self) -> None:
        """The west column, read bottom up, becomes the top row."""
        r = self.g.rotate_right()
        assert r.size == (3, 2)
        assert r.rows() == (("d", "a"), ("e", "b"), ("f", "c"))

    def test_rotate_left_formula(self) -> None:
        g = Grid.init(3, 5, lambda p: p)
        r = g.rotate_left()
        for i, j in r.positions():
            assert r.get((i, j)) == g.get((j, g.width - 1 - i))

    def test_rotate_right_formula(self) -> None:
        g = Grid.init(3, 5, lambda p: p)
        r = g.rotate_right()
        for i, j in r.positions():
            assert r.get((i, j)) == g.get((g.height - 1 - j, i))

    def test_rotations_are_fresh(self) -> None:
        """Rotating does not alias the source."""
        g = Grid.make(2, 2, 0)
        r = g.rotate_left()
        r.set((0, 0), 1)
        assert g.rows() == ((0, 0), (0, 0))

    def test_three_lefts_is_one_right(self) -> None:
        g = Grid.init(5, 10, lambda p: chr(ord("A") + p[0] + p[1]))
        assert g.rotate_left() == g.rotate_right().rotate_right().rotate_right()
        assert g.rotate_right() == g.rotate_left().rotate_left().rotate_left()

    def test_left_then_right_is_identity(self) -> None:
        assert self.g.rotate_left().rotate_right() == self.g
        assert self.g.rotate_right().rotate_left() == self.g
