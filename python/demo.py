"""
Demonstration scripts for the densegrid library.
"""

import logging
import sys

from ascii_render import (
    PrintOptions,
    format_chars,
    format_grid,
    make_color_fn,
    print_chars,
    render_chars,
    render_grids_flow,
)
from densegrid import Grid, east, move
from grid_parser import parse_grid
from grid_types import Direction, NotFoundError


def construction_demo() -> None:
    """Demonstrate construction, access and folding."""
    print("=" * 40)
    print("Grid.init(5, 5, i + j) and its sum:")
    print("=" * 40)
    g = Grid.init(5, 5, lambda p: p[0] + p[1])
    print(format_grid(lambda sink, _p, x: sink.write(str(x)), g, PrintOptions(sep=lambda sink, _p: sink.write(" "))))
    print(f"sum = {g.fold(lambda _p, x, s: x + s, 0)}")  # 100
    print()

    letters = Grid.init(3, 4, lambda p: chr(ord("A") + p[0] * 4 + p[1]))
    print(f"letters.size = {letters.size}")
    print(f"letters[(1, 2)] = {letters[(1, 2)]!r}")
    print(f"east of (1, 2) = {letters.get(east((1, 2)))!r}")
    print(f"inside (3, 0)? {letters.inside((3, 0))}")
    print()


def neighbor_demo() -> None:
    """Demonstrate the fixed neighbor order."""
    print("=" * 40)
    print("Neighbors of the center, N NW W SW S SE E NE:")
    print("=" * 40)
    g = parse_grid("abc\nd.e\nfgh")
    print_chars(sys.stdout, g)
    g.iter8(lambda q, x: print(f"  {q} -> {x}"), (1, 1))
    print(f"4-neighbors: {g.fold4(lambda _q, x, acc: acc + x, (1, 1), '')}")
    print(f"8-neighbors of corner (0, 0): {g.fold8(lambda _q, x, acc: acc + x, (0, 0), '')}")
    print()


def rotation_demo() -> None:
    """Demonstrate rotations side by side."""
    print("=" * 40)
    print("Rotations:")
    print("=" * 40)
    g = parse_grid("#..\n##.\n#..\n#..")
    color_fn = make_color_fn(v for _, v in g.items())
    print(render_grids_flow(
        {
            "orig": g,
            "left": g.rotate_left(),
            "right": g.rotate_right(),
            "half": g.rotate_right().rotate_right(),
        },
        color_fn=color_fn,
    ))
    assert g.rotate_left() == g.rotate_right().rotate_right().rotate_right()


def search_demo() -> None:
    """Demonstrate find, map and walking in a direction."""
    print("=" * 40)
    print("Find and walk:")
    print("=" * 40)
    g = parse_grid("....\n.S..\n....\n...#")
    start = g.find(lambda _p, x: x == "S")
    print(f"S found at {start}")

    p = start
    trail = g.copy()
    while trail.inside(move(Direction.SE, p)):
        p = move(Direction.SE, p)
        trail.set(p, "*")
    print("\n".join(render_chars(trail, highlight_pos=start)))
    print(f"original untouched: {format_chars(g).splitlines()}")

    try:
        g.find(lambda _p, x: x == "X")
    except NotFoundError as e:
        print(f"find 'X': {e}")

    circles = g.map(lambda _p, x: "o" if x == "." else x)
    print_chars(sys.stdout, circles, PrintOptions(bol=lambda sink, i: sink.write(f"{i}| ")))
    print()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "-v":
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')
    construction_demo()
    neighbor_demo()
    rotation_demo()
    print()
    search_demo()
