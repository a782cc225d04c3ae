"""Randomized depth-first backtracker: the baseline perfect-maze builder."""

import random
from typing import List, Optional, Set

from .grid import Grid
from .models import Position


def generate_dfs_maze(
    width: int,
    height: int,
    start: Position = Position(0, 0),
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Carve a perfect maze by iterative depth-first backtracking.

    Starting from ``start``, repeatedly move to a random unvisited neighbour,
    knocking down the wall between them; when stuck, pop back along the path
    until a cell with unvisited neighbours turns up. Every cell gets visited,
    so the passages form a spanning tree. This generator cannot fail.

    Args:
        width: Grid width
        height: Grid height
        start: Cell the walk starts from
        rng: Random source (a fresh unseeded one if omitted)

    Returns:
        The carved grid
    """
    rng = rng or random.Random()
    grid = Grid.create(width, height)
    if not grid.in_bounds(start):
        raise ValueError(f"Start {tuple(start)} outside {width}x{height} grid")

    visited: Set[Position] = {start}
    stack: List[Position] = [start]

    while stack:
        current = stack[-1]
        unvisited = [n for n in grid.neighbors(current) if n not in visited]
        if not unvisited:
            stack.pop()
            continue

        nxt = rng.choice(unvisited)
        grid.remove_wall_between(current, nxt)
        visited.add(nxt)
        stack.append(nxt)

    return grid
